from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from billsplit.models.assignment import AssignmentMode
from billsplit.models.roster import Participant


class ItemShare(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_id: str
    name: str
    mode: AssignmentMode
    portions: int
    total_portions: int
    share: Decimal


class PersonTotal(BaseModel):
    """Full-precision figures for one participant. Round only when presenting."""

    model_config = ConfigDict(frozen=True)

    participant: Participant
    subtotal: Decimal
    tax: Decimal
    service_charge: Decimal
    total: Decimal
    item_shares: tuple[ItemShare, ...] = ()


class SplitSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    people: tuple[PersonTotal, ...] = ()
    global_subtotal: Decimal
    accounted_total: Decimal
    remaining: Decimal
    receipt_total: Decimal
    is_fully_assigned: bool
    unassigned_item_ids: tuple[str, ...] = ()
