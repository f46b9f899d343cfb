from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from billsplit.core.config import settings
from billsplit.models.assignment import AssignmentMode, AssignmentStore
from billsplit.models.receipt import Receipt


class ItemStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_id: str
    name: str
    mode: AssignmentMode
    assigned_portions: int
    capacity: int | None  # None for free split, where the quantity cap does not apply
    is_unassigned: bool
    is_fully_assigned: bool


class CompletenessReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: tuple[ItemStatus, ...] = ()
    accounted_total: Decimal
    receipt_total: Decimal
    tolerance: Decimal
    is_fully_assigned: bool
    unassigned_item_ids: tuple[str, ...] = ()
    incomplete_item_ids: tuple[str, ...] = ()


def item_status(receipt: Receipt, store: AssignmentStore) -> list[ItemStatus]:
    statuses = []
    for item in receipt.items:
        assignment = store.assignments.get(item.id)
        mode = assignment.mode if assignment is not None else AssignmentMode.portioned
        assigned = assignment.total_portions() if assignment is not None else 0

        if mode == AssignmentMode.free_split:
            capacity = None
            fully_assigned = assigned >= 1
        else:
            capacity = item.quantity
            fully_assigned = assigned >= item.quantity

        statuses.append(ItemStatus(
            item_id=item.id,
            name=item.name,
            mode=mode,
            assigned_portions=assigned,
            capacity=capacity,
            is_unassigned=assigned == 0,
            is_fully_assigned=fully_assigned,
        ))
    return statuses


def unassigned_items(receipt: Receipt, store: AssignmentStore) -> list[str]:
    return [s.item_id for s in item_status(receipt, store) if s.is_unassigned]


def incomplete_items(receipt: Receipt, store: AssignmentStore) -> list[str]:
    """Items that still have unheld units (portioned) or no members (free split)."""
    return [s.item_id for s in item_status(receipt, store) if not s.is_fully_assigned]


def is_fully_assigned(
    accounted_total: Decimal,
    receipt_total: Decimal,
    tolerance: Decimal | None = None,
) -> bool:
    """Advisory: the people's totals cover the stated receipt total within tolerance."""
    tolerance = settings.completeness_tolerance if tolerance is None else tolerance
    return abs(receipt_total - accounted_total) <= tolerance


def completeness_report(
    receipt: Receipt,
    store: AssignmentStore,
    accounted_total: Decimal,
    tolerance: Decimal | None = None,
) -> CompletenessReport:
    tolerance = settings.completeness_tolerance if tolerance is None else tolerance
    statuses = item_status(receipt, store)
    return CompletenessReport(
        items=tuple(statuses),
        accounted_total=accounted_total,
        receipt_total=receipt.total,
        tolerance=tolerance,
        is_fully_assigned=is_fully_assigned(accounted_total, receipt.total, tolerance),
        unassigned_item_ids=tuple(s.item_id for s in statuses if s.is_unassigned),
        incomplete_item_ids=tuple(s.item_id for s in statuses if not s.is_fully_assigned),
    )
