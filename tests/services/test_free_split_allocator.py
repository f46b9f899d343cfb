from decimal import Decimal

from billsplit.models.assignment import (
    AssignmentMode, AssignmentStore, FreeSplitAssignment, PortionedAssignment,
)
from billsplit.models.receipt import LineItem, Receipt
from billsplit.services import free_split_allocator


ALICE = "person-alice"
BOB = "person-bob"
CAROL = "person-carol"
DAN = "person-dan"


def make_receipt(quantity=1):
    item = LineItem(id="item-0", name="Platter", price=Decimal("60.00"), quantity=quantity)
    return Receipt(items=(item,), total=Decimal("60.00"))


def test_switch_to_free_split_keeps_holders_as_members():
    receipt = make_receipt(3)
    store = AssignmentStore.for_receipt(receipt).replace(
        PortionedAssignment(item_id="item-0", portions={ALICE: 2, BOB: 1})
    )
    store = free_split_allocator.set_mode(store, receipt, "item-0", AssignmentMode.free_split)
    assignment = store.get("item-0")
    assert isinstance(assignment, FreeSplitAssignment)
    assert assignment.members == (ALICE, BOB)
    assert assignment.weights() == {ALICE: 1, BOB: 1}


def test_round_trip_recaps_to_one_portion():
    """Portioned {A:2} (qty 3) -> free split -> portioned gives {A:1}."""
    receipt = make_receipt(3)
    store = AssignmentStore.for_receipt(receipt).replace(
        PortionedAssignment(item_id="item-0", portions={ALICE: 2})
    )
    store = free_split_allocator.set_mode(store, receipt, "item-0", AssignmentMode.free_split)
    store = free_split_allocator.set_mode(store, receipt, "item-0", AssignmentMode.portioned)
    assignment = store.get("item-0")
    assert isinstance(assignment, PortionedAssignment)
    assert assignment.portions == {ALICE: 1}


def test_back_to_portioned_drops_members_beyond_quantity():
    receipt = make_receipt(2)
    store = AssignmentStore.for_receipt(receipt).replace(
        FreeSplitAssignment(item_id="item-0", members=(CAROL, ALICE, BOB))
    )
    store = free_split_allocator.set_mode(store, receipt, "item-0", "portioned")
    assert store.get("item-0").portions == {CAROL: 1, ALICE: 1}


def test_same_mode_is_noop():
    receipt = make_receipt()
    store = AssignmentStore.for_receipt(receipt)
    assert free_split_allocator.set_mode(store, receipt, "item-0", AssignmentMode.portioned) is store


def test_toggle_has_no_quantity_ceiling():
    receipt = make_receipt(1)
    store = free_split_allocator.set_mode(
        AssignmentStore.for_receipt(receipt), receipt, "item-0", AssignmentMode.free_split
    )
    for person in (ALICE, BOB, CAROL, DAN):
        store = free_split_allocator.toggle_membership(store, receipt, "item-0", person)
    assert store.get("item-0").members == (ALICE, BOB, CAROL, DAN)


def test_toggle_removes_member():
    receipt = make_receipt()
    store = AssignmentStore.for_receipt(receipt).replace(
        FreeSplitAssignment(item_id="item-0", members=(ALICE, BOB))
    )
    store = free_split_allocator.toggle_membership(store, receipt, "item-0", ALICE)
    assert store.get("item-0").members == (BOB,)


def test_join_and_leave_are_idempotent():
    receipt = make_receipt()
    store = AssignmentStore.for_receipt(receipt).replace(
        FreeSplitAssignment(item_id="item-0", members=(ALICE,))
    )
    assert free_split_allocator.join(store, receipt, "item-0", ALICE) is store
    assert free_split_allocator.leave(store, receipt, "item-0", BOB) is store
