from decimal import Decimal

from billsplit.models.assignment import Assignment, AssignmentStore
from billsplit.models.receipt import LineItem, Receipt
from billsplit.models.roster import Roster
from billsplit.models.summary import ItemShare, PersonTotal, SplitSummary
from billsplit.services.completeness_service import is_fully_assigned, unassigned_items

ZERO = Decimal("0")


def compute_item_shares(item: LineItem, assignment: Assignment | None) -> dict[str, Decimal]:
    """
    Split one line item's price by portion weight.
    Free split weights are all 1, so that case is an equal split among members.
    An item nobody holds yields no shares.
    """
    if assignment is None:
        return {}
    weights = assignment.weights()
    total_portions = sum(weights.values())
    if total_portions == 0:
        return {}
    return {
        participant_id: item.price * weight / total_portions
        for participant_id, weight in weights.items()
    }


def calculate_split(
    receipt: Receipt,
    store: AssignmentStore,
    roster: Roster,
    tolerance: Decimal | None = None,
) -> SplitSummary:
    """
    Returns the per-participant cost picture for a receipt.
    subtotal = sum of item shares; tax and service charge are apportioned by
    subtotal / receipt subtotal (0 when the receipt subtotal is 0).
    total = subtotal + tax + service_charge.
    Values keep full Decimal precision; nothing here is rounded.
    """
    breakdown: dict[str, list[ItemShare]] = {p.id: [] for p in roster.participants}

    for item in receipt.items:
        assignment = store.assignments.get(item.id)
        shares = compute_item_shares(item, assignment)
        if not shares:
            continue
        weights = assignment.weights()
        total_portions = sum(weights.values())
        for participant_id, share in shares.items():
            if participant_id not in breakdown:
                continue
            breakdown[participant_id].append(ItemShare(
                item_id=item.id,
                name=item.name,
                mode=assignment.mode,
                portions=weights[participant_id],
                total_portions=total_portions,
                share=share,
            ))

    global_subtotal = receipt.subtotal
    people = []
    for participant in roster.participants:
        item_shares = breakdown[participant.id]
        subtotal = sum((s.share for s in item_shares), ZERO)
        proportion = subtotal / global_subtotal if global_subtotal > 0 else ZERO
        tax = receipt.tax * proportion
        service_charge = receipt.service_charge * proportion
        people.append(PersonTotal(
            participant=participant,
            subtotal=subtotal,
            tax=tax,
            service_charge=service_charge,
            total=subtotal + tax + service_charge,
            item_shares=tuple(item_shares),
        ))

    accounted_total = sum((p.total for p in people), ZERO)
    return SplitSummary(
        people=tuple(people),
        global_subtotal=global_subtotal,
        accounted_total=accounted_total,
        remaining=max(ZERO, receipt.total - accounted_total),
        receipt_total=receipt.total,
        is_fully_assigned=is_fully_assigned(accounted_total, receipt.total, tolerance),
        unassigned_item_ids=tuple(unassigned_items(receipt, store)),
    )
