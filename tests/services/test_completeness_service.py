from decimal import Decimal

from billsplit.models.assignment import AssignmentMode, AssignmentStore, FreeSplitAssignment, PortionedAssignment
from billsplit.models.receipt import LineItem, Receipt
from billsplit.services.completeness_service import (
    completeness_report, incomplete_items, is_fully_assigned, item_status, unassigned_items,
)


def make_receipt():
    items = (
        LineItem(id="fries", name="Fries", price=Decimal("6"), quantity=3),
        LineItem(id="cola", name="Cola", price=Decimal("4"), quantity=2),
        LineItem(id="nachos", name="Nachos", price=Decimal("9"), quantity=1),
    )
    return Receipt(items=items, total=Decimal("19"))


def make_store(receipt):
    store = AssignmentStore.for_receipt(receipt)
    store = store.replace(PortionedAssignment(item_id="fries", portions={"a": 1, "b": 1}))
    store = store.replace(FreeSplitAssignment(item_id="nachos", members=("a",)))
    return store


def test_item_status_per_mode():
    receipt = make_receipt()
    statuses = {s.item_id: s for s in item_status(receipt, make_store(receipt))}

    assert statuses["fries"].assigned_portions == 2
    assert statuses["fries"].capacity == 3
    assert statuses["fries"].is_fully_assigned is False
    assert statuses["fries"].is_unassigned is False

    assert statuses["cola"].is_unassigned is True

    # A single member fully assigns a free split item
    assert statuses["nachos"].mode == AssignmentMode.free_split
    assert statuses["nachos"].capacity is None
    assert statuses["nachos"].is_fully_assigned is True


def test_unassigned_and_incomplete_lists():
    receipt = make_receipt()
    store = make_store(receipt)
    assert unassigned_items(receipt, store) == ["cola"]
    assert incomplete_items(receipt, store) == ["fries", "cola"]


def test_tolerance_boundary():
    assert is_fully_assigned(Decimal("99.95"), Decimal("100.00"), Decimal("0.05")) is True
    assert is_fully_assigned(Decimal("99.94"), Decimal("100.00"), Decimal("0.05")) is False
    assert is_fully_assigned(Decimal("100.05"), Decimal("100.00"), Decimal("0.05")) is True


def test_default_tolerance_from_settings():
    assert is_fully_assigned(Decimal("18.96"), Decimal("19")) is True
    assert is_fully_assigned(Decimal("18.90"), Decimal("19")) is False


def test_report_collects_everything():
    receipt = make_receipt()
    report = completeness_report(receipt, make_store(receipt), Decimal("13"))
    assert report.receipt_total == Decimal("19")
    assert report.is_fully_assigned is False
    assert report.unassigned_item_ids == ("cola",)
    assert report.incomplete_item_ids == ("fries", "cola")
    assert len(report.items) == 3
