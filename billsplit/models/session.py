import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from billsplit.models.assignment import AssignmentStore
from billsplit.models.receipt import Receipt
from billsplit.models.roster import Roster


class SplitSession(BaseModel):
    """Snapshot of one bill being split. Replaced wholesale on every change."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    receipt: Receipt
    roster: Roster = Field(default_factory=Roster)
    assignments: AssignmentStore
    version: int = 1
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
