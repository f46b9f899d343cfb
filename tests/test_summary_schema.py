import uuid
from decimal import Decimal

from billsplit.models.assignment import AssignmentStore, PortionedAssignment
from billsplit.models.receipt import LineItem, Receipt
from billsplit.models.roster import Participant, Roster
from billsplit.schemas.summary import SplitSummaryResponse
from billsplit.services.calculation_service import calculate_split


PEOPLE = tuple(Participant(id=f"person-{n}", name=n.title()) for n in ("ana", "ben", "cy", "dee"))
IDLE = PEOPLE[3]


def three_way_cake(tax="0", service_charge="0"):
    """Cake at 10 for 3 slices, one slice each for the first three people."""
    receipt = Receipt(
        items=(LineItem(id="cake", name="Cake", price=Decimal("10"), quantity=3),),
        tax=Decimal(tax),
        service_charge=Decimal(service_charge),
        total=Decimal("10") + Decimal(tax) + Decimal(service_charge),
    )
    store = AssignmentStore.for_receipt(receipt).replace(
        PortionedAssignment(item_id="cake", portions={p.id: 1 for p in PEOPLE[:3]})
    )
    return calculate_split(receipt, store, Roster(participants=PEOPLE))


def test_idle_participant_shows_zero_for_any_seed():
    summary = three_way_cake()
    for _ in range(60):
        response = SplitSummaryResponse.from_summary(summary, "EGP", seed=str(uuid.uuid4()))
        people = {p.participant.id: p for p in response.people}
        assert people[IDLE.id].total == Decimal("0.00")
        assert people[IDLE.id].subtotal == Decimal("0.00")
        assert sum(p.total for p in response.people) == Decimal("10.00")
        assert sorted(p.total for p in response.people[:3]) == [Decimal("3.33"), Decimal("3.33"), Decimal("3.34")]


def test_person_rows_add_up_to_total():
    summary = three_way_cake()
    response = SplitSummaryResponse.from_summary(summary, "EGP", seed="fixed")
    for person in response.people:
        assert person.subtotal + person.tax + person.service_charge == person.total


def test_person_rows_add_up_with_fees():
    summary = three_way_cake(tax="1", service_charge="0.5")
    for _ in range(30):
        response = SplitSummaryResponse.from_summary(summary, "EGP", seed=str(uuid.uuid4()))
        assert sum(p.total for p in response.people) == Decimal("11.50")
        for person in response.people:
            assert person.subtotal + person.tax + person.service_charge == person.total
        idle = response.people[3]
        assert (idle.subtotal, idle.tax, idle.service_charge, idle.total) == (Decimal("0"),) * 4
