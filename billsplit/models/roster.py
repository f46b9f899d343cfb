from pydantic import BaseModel, ConfigDict, model_validator

from billsplit.core.exceptions import UnknownParticipantError


class Participant(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class Roster(BaseModel):
    """Ordered participants. Ids are unique, names need not be."""

    model_config = ConfigDict(frozen=True)

    participants: tuple[Participant, ...] = ()

    @model_validator(mode="after")
    def _check_unique_ids(self):
        ids = self.ids()
        if len(set(ids)) != len(ids):
            raise ValueError("participant ids must be unique")
        return self

    def ids(self) -> list[str]:
        return [p.id for p in self.participants]

    def has(self, participant_id: str) -> bool:
        return any(p.id == participant_id for p in self.participants)

    def get(self, participant_id: str) -> Participant:
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        raise UnknownParticipantError(participant_id)
