import enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from billsplit.core.exceptions import UnknownItemError
from billsplit.models.receipt import Receipt


class AssignmentMode(str, enum.Enum):
    portioned = "portioned"
    free_split = "free_split"


class PortionedAssignment(BaseModel):
    """Participant id -> number of physical units held. Absent means zero."""

    model_config = ConfigDict(frozen=True)

    mode: Literal[AssignmentMode.portioned] = AssignmentMode.portioned
    item_id: str
    portions: dict[str, int] = Field(default_factory=dict)

    @field_validator("portions")
    @classmethod
    def _positive_counts(cls, value: dict[str, int]) -> dict[str, int]:
        if any(count < 1 for count in value.values()):
            raise ValueError("portion counts must be >= 1; drop the entry instead")
        return value

    def weights(self) -> dict[str, int]:
        return dict(self.portions)

    def total_portions(self) -> int:
        return sum(self.portions.values())

    def portions_of(self, participant_id: str) -> int:
        return self.portions.get(participant_id, 0)

    def with_count(self, participant_id: str, count: int) -> "PortionedAssignment":
        portions = dict(self.portions)
        if count > 0:
            portions[participant_id] = count
        else:
            portions.pop(participant_id, None)
        return PortionedAssignment(item_id=self.item_id, portions=portions)

    def without(self, participant_id: str) -> "PortionedAssignment":
        if participant_id not in self.portions:
            return self
        return self.with_count(participant_id, 0)


class FreeSplitAssignment(BaseModel):
    """Equal split among members. No quantity cap, every member weighs 1."""

    model_config = ConfigDict(frozen=True)

    mode: Literal[AssignmentMode.free_split] = AssignmentMode.free_split
    item_id: str
    members: tuple[str, ...] = ()

    @field_validator("members")
    @classmethod
    def _unique_members(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(set(value)) != len(value):
            raise ValueError("free split members must be unique")
        return value

    def weights(self) -> dict[str, int]:
        return {member: 1 for member in self.members}

    def total_portions(self) -> int:
        return len(self.members)

    def portions_of(self, participant_id: str) -> int:
        return 1 if participant_id in self.members else 0

    def with_member(self, participant_id: str) -> "FreeSplitAssignment":
        if participant_id in self.members:
            return self
        return FreeSplitAssignment(item_id=self.item_id, members=self.members + (participant_id,))

    def without(self, participant_id: str) -> "FreeSplitAssignment":
        if participant_id not in self.members:
            return self
        return FreeSplitAssignment(
            item_id=self.item_id,
            members=tuple(m for m in self.members if m != participant_id),
        )


Assignment = Annotated[
    Union[PortionedAssignment, FreeSplitAssignment],
    Field(discriminator="mode"),
]


class AssignmentStore(BaseModel):
    """One assignment per line item, keyed by item id in receipt order."""

    model_config = ConfigDict(frozen=True)

    assignments: dict[str, Assignment] = Field(default_factory=dict)

    @classmethod
    def for_receipt(cls, receipt: Receipt) -> "AssignmentStore":
        return cls(assignments={
            item.id: PortionedAssignment(item_id=item.id) for item in receipt.items
        })

    def get(self, item_id: str) -> Assignment:
        try:
            return self.assignments[item_id]
        except KeyError:
            raise UnknownItemError(item_id) from None

    def replace(self, assignment: Assignment) -> "AssignmentStore":
        if assignment.item_id not in self.assignments:
            raise UnknownItemError(assignment.item_id)
        assignments = dict(self.assignments)
        assignments[assignment.item_id] = assignment
        return AssignmentStore(assignments=assignments)

    def without_participant(self, participant_id: str) -> "AssignmentStore":
        return AssignmentStore(assignments={
            item_id: assignment.without(participant_id)
            for item_id, assignment in self.assignments.items()
        })

    def holders(self) -> set[str]:
        held = set()
        for assignment in self.assignments.values():
            held.update(assignment.weights())
        return held
