from pydantic import BaseModel

from billsplit.models.assignment import Assignment, AssignmentMode


class ToggleAssignmentRequest(BaseModel):
    item_id: str
    participant_id: str
    version: int


class PortionUpdateRequest(BaseModel):
    item_id: str
    participant_id: str
    delta: int
    version: int


class ModeUpdateRequest(BaseModel):
    mode: AssignmentMode
    version: int


class AssignAllRequest(BaseModel):
    version: int | None = None


class AssignmentResponse(BaseModel):
    item_id: str
    mode: AssignmentMode
    portions: dict[str, int]

    @classmethod
    def from_assignment(cls, assignment: Assignment) -> "AssignmentResponse":
        return cls(item_id=assignment.item_id, mode=assignment.mode, portions=assignment.weights())
