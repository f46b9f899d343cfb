from decimal import Decimal
import pytest

from billsplit.core.exceptions import UnknownParticipantError
from billsplit.models.assignment import AssignmentMode, AssignmentStore, FreeSplitAssignment
from billsplit.models.receipt import LineItem, Receipt
from billsplit.models.roster import Participant, Roster
from billsplit.services import assignment_service


ALICE = Participant(id="person-alice", name="Alice")
BOB = Participant(id="person-bob", name="Bob")
ROSTER = Roster(participants=(ALICE, BOB))


def make_receipt():
    items = (
        LineItem(id="burger", name="Burger", price=Decimal("12"), quantity=1),
        LineItem(id="wings", name="Wings", price=Decimal("18"), quantity=3),
    )
    return Receipt(items=items, tax=Decimal("3"), total=Decimal("33"))


def test_toggle_routes_to_portion_allocator_with_cap():
    receipt = make_receipt()
    store = AssignmentStore.for_receipt(receipt)
    store = assignment_service.toggle_assignment(store, receipt, ROSTER, "burger", ALICE.id)
    store = assignment_service.toggle_assignment(store, receipt, ROSTER, "burger", BOB.id)
    assert store.get("burger").portions == {ALICE.id: 1}


def test_toggle_routes_to_free_split_without_cap():
    receipt = make_receipt()
    store = AssignmentStore.for_receipt(receipt)
    store = assignment_service.set_assignment_mode(store, receipt, "burger", AssignmentMode.free_split)
    store = assignment_service.toggle_assignment(store, receipt, ROSTER, "burger", ALICE.id)
    store = assignment_service.toggle_assignment(store, receipt, ROSTER, "burger", BOB.id)
    assert store.get("burger").members == (ALICE.id, BOB.id)


def test_portion_controls_on_free_split_join_and_leave():
    receipt = make_receipt()
    store = AssignmentStore.for_receipt(receipt)
    store = assignment_service.set_assignment_mode(store, receipt, "wings", "free_split")
    store = assignment_service.update_portion(store, receipt, ROSTER, "wings", ALICE.id, 1)
    store = assignment_service.update_portion(store, receipt, ROSTER, "wings", ALICE.id, 1)
    assert store.get("wings").weights() == {ALICE.id: 1}
    store = assignment_service.update_portion(store, receipt, ROSTER, "wings", ALICE.id, -1)
    assert store.get("wings").members == ()


def test_portion_controls_on_portioned_item():
    receipt = make_receipt()
    store = AssignmentStore.for_receipt(receipt)
    store = assignment_service.update_portion(store, receipt, ROSTER, "wings", ALICE.id, 2)
    store = assignment_service.update_portion(store, receipt, ROSTER, "wings", BOB.id, 2)
    assert store.get("wings").portions == {ALICE.id: 2, BOB.id: 1}


def test_zero_delta_is_noop():
    receipt = make_receipt()
    store = AssignmentStore.for_receipt(receipt)
    assert assignment_service.update_portion(store, receipt, ROSTER, "wings", ALICE.id, 0) is store


def test_participant_must_be_on_roster():
    receipt = make_receipt()
    store = AssignmentStore.for_receipt(receipt)
    with pytest.raises(UnknownParticipantError):
        assignment_service.toggle_assignment(store, receipt, ROSTER, "burger", "person-ghost")


def test_assign_all_to_all():
    receipt = make_receipt()
    store = assignment_service.assign_all_to_all(AssignmentStore.for_receipt(receipt), receipt, ROSTER)
    for item in receipt.items:
        assignment = store.get(item.id)
        assert isinstance(assignment, FreeSplitAssignment)
        assert assignment.members == (ALICE.id, BOB.id)


def test_assign_all_with_empty_roster_is_noop():
    receipt = make_receipt()
    store = AssignmentStore.for_receipt(receipt)
    assert assignment_service.assign_all_to_all(store, receipt, Roster()) is store
