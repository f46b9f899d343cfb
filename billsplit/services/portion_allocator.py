import logging

from billsplit.core.exceptions import AssignmentModeError
from billsplit.models.assignment import AssignmentStore, PortionedAssignment
from billsplit.models.receipt import LineItem, Receipt

logger = logging.getLogger(__name__)


def _portioned(store: AssignmentStore, item_id: str) -> PortionedAssignment:
    assignment = store.get(item_id)
    if not isinstance(assignment, PortionedAssignment):
        raise AssignmentModeError(f"Line item {item_id} is not in portioned mode")
    return assignment


def headroom(item: LineItem, assignment: PortionedAssignment, participant_id: str) -> int:
    """Most units this participant may hold given everyone else's portions."""
    others = assignment.total_portions() - assignment.portions_of(participant_id)
    return max(0, item.quantity - others)


def update_portion(
    store: AssignmentStore,
    receipt: Receipt,
    item_id: str,
    participant_id: str,
    delta: int,
) -> AssignmentStore:
    """
    Move a participant's portion count by delta.
    Increments clamp to the remaining quantity; decrements clamp at zero and
    drop the entry. Returns the same store when nothing changes.
    """
    item = receipt.get_item(item_id)
    assignment = _portioned(store, item_id)
    current = assignment.portions_of(participant_id)

    if delta > 0:
        target = min(current + delta, headroom(item, assignment, participant_id))
        if target <= current:
            logger.debug(f"Line item {item_id} is saturated, ignoring increment for {participant_id}")
            return store
    else:
        target = max(0, current + delta)

    if target == current:
        return store
    return store.replace(assignment.with_count(participant_id, target))


def increment(store: AssignmentStore, receipt: Receipt, item_id: str, participant_id: str) -> AssignmentStore:
    return update_portion(store, receipt, item_id, participant_id, 1)


def decrement(store: AssignmentStore, receipt: Receipt, item_id: str, participant_id: str) -> AssignmentStore:
    return update_portion(store, receipt, item_id, participant_id, -1)


def toggle_membership(
    store: AssignmentStore,
    receipt: Receipt,
    item_id: str,
    participant_id: str,
) -> AssignmentStore:
    """One-tap toggle: a holder is removed entirely, a non-holder gets 1 unit if any is left."""
    item = receipt.get_item(item_id)
    assignment = _portioned(store, item_id)

    if assignment.portions_of(participant_id) > 0:
        return store.replace(assignment.without(participant_id))

    if headroom(item, assignment, participant_id) < 1:
        logger.debug(f"Line item {item_id} is saturated, ignoring toggle for {participant_id}")
        return store
    return store.replace(assignment.with_count(participant_id, 1))
