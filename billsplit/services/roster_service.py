import logging
import uuid

from billsplit.core.exceptions import (
    DuplicateParticipantError, ParticipantValidationError, UnknownParticipantError,
)
from billsplit.models.assignment import AssignmentStore
from billsplit.models.roster import Participant, Roster

logger = logging.getLogger(__name__)


def new_participant_id() -> str:
    return f"person-{uuid.uuid4().hex[:12]}"


def add_participant(
    roster: Roster,
    name: str,
    participant_id: str | None = None,
) -> tuple[Roster, Participant]:
    name = (name or "").strip()
    if not name:
        raise ParticipantValidationError("Participant name must not be blank")

    participant_id = participant_id or new_participant_id()
    if roster.has(participant_id):
        raise DuplicateParticipantError(f"Participant {participant_id} already exists")

    participant = Participant(id=participant_id, name=name)
    return Roster(participants=roster.participants + (participant,)), participant


def remove_participant(
    roster: Roster,
    store: AssignmentStore,
    participant_id: str,
) -> tuple[Roster, AssignmentStore]:
    """
    Remove a participant and every portion they hold.
    Other holders keep their entries, so their share of those items grows.
    """
    if not roster.has(participant_id):
        raise UnknownParticipantError(participant_id)

    remaining = tuple(p for p in roster.participants if p.id != participant_id)
    logger.info(f"Removed participant {participant_id} from roster and assignments")
    return Roster(participants=remaining), store.without_participant(participant_id)
