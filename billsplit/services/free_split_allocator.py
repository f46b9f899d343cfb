import logging

from billsplit.core.exceptions import AssignmentModeError
from billsplit.models.assignment import (
    AssignmentMode, AssignmentStore, FreeSplitAssignment, PortionedAssignment,
)
from billsplit.models.receipt import Receipt

logger = logging.getLogger(__name__)


def _free_split(store: AssignmentStore, item_id: str) -> FreeSplitAssignment:
    assignment = store.get(item_id)
    if not isinstance(assignment, FreeSplitAssignment):
        raise AssignmentModeError(f"Line item {item_id} is not in free split mode")
    return assignment


def set_mode(
    store: AssignmentStore,
    receipt: Receipt,
    item_id: str,
    mode: AssignmentMode | str,
) -> AssignmentStore:
    """
    Switch an item between portioned and free split.

    Portioned -> free split keeps every holder as a member (weight 1).
    Free split -> portioned grants members one unit each, in member order,
    until the item's quantity runs out; later members are dropped.
    """
    item = receipt.get_item(item_id)
    assignment = store.get(item_id)
    mode = AssignmentMode(mode)

    if assignment.mode == mode:
        return store

    if mode == AssignmentMode.free_split:
        members = tuple(pid for pid, count in assignment.weights().items() if count > 0)
        return store.replace(FreeSplitAssignment(item_id=item_id, members=members))

    portions = {}
    remaining = item.quantity
    for member in assignment.members:
        grant = min(1, remaining)
        if grant == 0:
            break
        portions[member] = grant
        remaining -= grant

    dropped = len(assignment.members) - len(portions)
    if dropped:
        logger.info(f"Line item {item_id}: {dropped} free split member(s) dropped when re-capping to quantity {item.quantity}")
    return store.replace(PortionedAssignment(item_id=item_id, portions=portions))


def toggle_membership(
    store: AssignmentStore,
    receipt: Receipt,
    item_id: str,
    participant_id: str,
) -> AssignmentStore:
    receipt.get_item(item_id)
    assignment = _free_split(store, item_id)
    if participant_id in assignment.members:
        return store.replace(assignment.without(participant_id))
    return store.replace(assignment.with_member(participant_id))


def join(store: AssignmentStore, receipt: Receipt, item_id: str, participant_id: str) -> AssignmentStore:
    receipt.get_item(item_id)
    assignment = _free_split(store, item_id)
    if participant_id in assignment.members:
        return store
    return store.replace(assignment.with_member(participant_id))


def leave(store: AssignmentStore, receipt: Receipt, item_id: str, participant_id: str) -> AssignmentStore:
    receipt.get_item(item_id)
    assignment = _free_split(store, item_id)
    if participant_id not in assignment.members:
        return store
    return store.replace(assignment.without(participant_id))
