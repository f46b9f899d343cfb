from decimal import Decimal
import pytest

from billsplit.core.exceptions import (
    DuplicateParticipantError, ParticipantValidationError, UnknownParticipantError,
)
from billsplit.models.assignment import AssignmentStore, FreeSplitAssignment, PortionedAssignment
from billsplit.models.receipt import LineItem, Receipt
from billsplit.models.roster import Roster
from billsplit.services.roster_service import add_participant, remove_participant


def test_add_generates_unique_ids_and_trims_names():
    roster, alex = add_participant(Roster(), "  Alex ")
    roster, alex2 = add_participant(roster, "Alex")
    assert alex.name == "Alex"
    assert alex.id.startswith("person-")
    assert alex.id != alex2.id
    assert roster.ids() == [alex.id, alex2.id]


def test_blank_name_rejected():
    with pytest.raises(ParticipantValidationError):
        add_participant(Roster(), "   ")


def test_duplicate_id_rejected():
    roster, _ = add_participant(Roster(), "Sam", participant_id="p1")
    with pytest.raises(DuplicateParticipantError):
        add_participant(roster, "Other Sam", participant_id="p1")


def test_remove_cascades_into_every_assignment():
    items = (
        LineItem(id="a", name="A", price=Decimal("10"), quantity=2),
        LineItem(id="b", name="B", price=Decimal("10"), quantity=1),
    )
    receipt = Receipt(items=items, total=Decimal("20"))
    roster, sam = add_participant(Roster(), "Sam")
    roster, kim = add_participant(roster, "Kim")
    store = AssignmentStore.for_receipt(receipt)
    store = store.replace(PortionedAssignment(item_id="a", portions={sam.id: 1, kim.id: 1}))
    store = store.replace(FreeSplitAssignment(item_id="b", members=(kim.id, sam.id)))

    roster, store = remove_participant(roster, store, sam.id)

    assert roster.ids() == [kim.id]
    assert store.get("a").portions == {kim.id: 1}
    assert store.get("b").members == (kim.id,)
    assert sam.id not in store.holders()


def test_remove_unknown_participant():
    with pytest.raises(UnknownParticipantError):
        remove_participant(Roster(), AssignmentStore(), "nobody")
