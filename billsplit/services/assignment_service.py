import logging

from billsplit.core.exceptions import UnknownParticipantError
from billsplit.models.assignment import (
    AssignmentMode, AssignmentStore, FreeSplitAssignment,
)
from billsplit.models.receipt import Receipt
from billsplit.models.roster import Roster
from billsplit.services import free_split_allocator, portion_allocator

logger = logging.getLogger(__name__)


def _require_participant(roster: Roster, participant_id: str) -> None:
    if not roster.has(participant_id):
        raise UnknownParticipantError(participant_id)


def toggle_assignment(
    store: AssignmentStore,
    receipt: Receipt,
    roster: Roster,
    item_id: str,
    participant_id: str,
) -> AssignmentStore:
    """
    Toggle a participant on/off a line item.
    Portioned items respect the quantity cap; free split items accept anyone.
    """
    _require_participant(roster, participant_id)
    if store.get(item_id).mode == AssignmentMode.free_split:
        return free_split_allocator.toggle_membership(store, receipt, item_id, participant_id)
    return portion_allocator.toggle_membership(store, receipt, item_id, participant_id)


def update_portion(
    store: AssignmentStore,
    receipt: Receipt,
    roster: Roster,
    item_id: str,
    participant_id: str,
    delta: int,
) -> AssignmentStore:
    """
    Apply the +/- portion controls.
    On a free split item a member's weight is fixed at 1, so a positive delta
    joins and a negative delta leaves.
    """
    _require_participant(roster, participant_id)
    if delta == 0:
        return store
    if store.get(item_id).mode == AssignmentMode.free_split:
        if delta > 0:
            return free_split_allocator.join(store, receipt, item_id, participant_id)
        return free_split_allocator.leave(store, receipt, item_id, participant_id)
    return portion_allocator.update_portion(store, receipt, item_id, participant_id, delta)


def set_assignment_mode(
    store: AssignmentStore,
    receipt: Receipt,
    item_id: str,
    mode: AssignmentMode | str,
) -> AssignmentStore:
    return free_split_allocator.set_mode(store, receipt, item_id, mode)


def assign_all_to_all(
    store: AssignmentStore,
    receipt: Receipt,
    roster: Roster,
) -> AssignmentStore:
    """
    Split ALL line items equally among ALL participants.
    Every item is switched to free split with the whole roster as members.
    """
    member_ids = tuple(roster.ids())
    if not receipt.items or not member_ids:
        return store

    assignments = {
        item.id: FreeSplitAssignment(item_id=item.id, members=member_ids)
        for item in receipt.items
    }
    logger.info(f"Assigned {len(assignments)} line item(s) to {len(member_ids)} participant(s)")
    return AssignmentStore(assignments=assignments)
