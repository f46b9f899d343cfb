from decimal import Decimal

from pydantic import BaseModel

from billsplit.models.assignment import AssignmentMode
from billsplit.models.summary import SplitSummary
from billsplit.schemas.participant import ParticipantResponse
from billsplit.schemas.receipt import Money
from billsplit.services.completeness_service import CompletenessReport
from billsplit.utils.currency_utils import allocate_units, distribute_cents, to_units


class ItemShareResponse(BaseModel):
    item_id: str
    name: str
    mode: AssignmentMode
    portions: int
    total_portions: int
    share: Money


class PersonTotalResponse(BaseModel):
    participant: ParticipantResponse
    subtotal: Money
    tax: Money
    service_charge: Money
    total: Money
    item_shares: list[ItemShareResponse]


class SplitSummaryResponse(BaseModel):
    currency: str
    people: list[PersonTotalResponse]
    global_subtotal: Money
    accounted_total: Money
    remaining: Money
    receipt_total: Money
    is_fully_assigned: bool
    unassigned_item_ids: list[str]

    @classmethod
    def from_summary(cls, summary: SplitSummary, currency: str, seed: str | None = None) -> "SplitSummaryResponse":
        # Person totals are rounded together so they add up to the rounded accounted total
        display_totals = distribute_cents(
            {p.participant.id: p.total for p in summary.people}, seed=seed
        )
        people = []
        for person in summary.people:
            total = display_totals[person.participant.id]
            # Components are split from the displayed total so each row adds up
            parts = allocate_units(
                {"subtotal": person.subtotal, "tax": person.tax, "service_charge": person.service_charge},
                to_units(total),
            )
            people.append(PersonTotalResponse(
                participant=ParticipantResponse.model_validate(person.participant),
                **parts,
                total=total,
                item_shares=[ItemShareResponse.model_validate(s, from_attributes=True) for s in person.item_shares],
            ))
        return cls(
            currency=currency,
            people=people,
            global_subtotal=summary.global_subtotal,
            accounted_total=summary.accounted_total,
            remaining=summary.remaining,
            receipt_total=summary.receipt_total,
            is_fully_assigned=summary.is_fully_assigned,
            unassigned_item_ids=list(summary.unassigned_item_ids),
        )


class ItemStatusResponse(BaseModel):
    item_id: str
    name: str
    mode: AssignmentMode
    assigned_portions: int
    capacity: int | None
    is_unassigned: bool
    is_fully_assigned: bool


class CompletenessResponse(BaseModel):
    items: list[ItemStatusResponse]
    accounted_total: Money
    receipt_total: Money
    tolerance: Decimal
    is_fully_assigned: bool
    unassigned_item_ids: list[str]
    incomplete_item_ids: list[str]

    @classmethod
    def from_report(cls, report: CompletenessReport) -> "CompletenessResponse":
        return cls(
            items=[ItemStatusResponse.model_validate(s, from_attributes=True) for s in report.items],
            accounted_total=report.accounted_total,
            receipt_total=report.receipt_total,
            tolerance=report.tolerance,
            is_fully_assigned=report.is_fully_assigned,
            unassigned_item_ids=list(report.unassigned_item_ids),
            incomplete_item_ids=list(report.incomplete_item_ids),
        )
