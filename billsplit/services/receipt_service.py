import logging
import uuid
from decimal import Decimal, InvalidOperation, ROUND_CEILING

from pydantic import ValidationError

from billsplit.core.exceptions import ReceiptValidationError
from billsplit.models.receipt import LineItem, Receipt

logger = logging.getLogger(__name__)


def _to_decimal(value, field: str, default: Decimal | None = None) -> Decimal:
    if value is None:
        if default is None:
            raise ReceiptValidationError(f"{field} is missing")
        return default
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ReceiptValidationError(f"{field} is not a number: {value!r}") from None
    if not amount.is_finite():
        raise ReceiptValidationError(f"{field} is not a number: {value!r}")
    if amount < 0:
        raise ReceiptValidationError(f"{field} is negative: {amount}")
    return amount


def normalize_quantity(value) -> int:
    """
    Whole units of a line. Missing or unusable quantities count as 1;
    fractional ones (e.g. 0.5 kg) round up to the next whole unit.
    """
    if value is None:
        return 1
    try:
        qty = Decimal(str(value))
    except (InvalidOperation, ValueError):
        logger.warning(f"Unusable quantity from extraction: {value!r}, defaulting to 1")
        return 1
    if not qty.is_finite() or qty <= 0:
        return 1
    return max(1, int(qty.to_integral_value(rounding=ROUND_CEILING)))


def _build_line_items(raw_items: list[dict], token: str) -> list[LineItem]:
    line_items = []
    for idx, raw in enumerate(raw_items):
        name = (raw.get("name") or raw.get("description") or "").strip()
        if not name:
            raise ReceiptValidationError(f"Item {idx} has no name")
        price = raw.get("price", raw.get("amount"))
        line_items.append(LineItem(
            id=str(raw["id"]) if raw.get("id") else f"item-{idx}-{token}",
            name=name,
            price=_to_decimal(price, f"Item '{name}' price"),
            quantity=normalize_quantity(raw.get("quantity")),
        ))
    return line_items


def _assemble(line_items: list[LineItem], tax: Decimal, service_charge: Decimal, total: Decimal) -> Receipt:
    try:
        return Receipt(items=tuple(line_items), tax=tax, service_charge=service_charge, total=total)
    except ValidationError as e:
        raise ReceiptValidationError(str(e)) from e


def build_receipt(extraction: dict) -> Receipt:
    """
    Turn the OCR collaborator's JSON into a Receipt.

    Accepts either {items: [{name, price, quantity}], tax, serviceCharge, total}
    or {line_items: [{description, amount, quantity}], tax, service_charge, total}.
    Every item gets an id unique to this intake. A missing total falls back to
    items + tax + service charge.
    """
    raw_items = extraction.get("items")
    if raw_items is None:
        raw_items = extraction.get("line_items") or []

    token = uuid.uuid4().hex[:8]
    line_items = _build_line_items(raw_items, token)

    tax = _to_decimal(extraction.get("tax"), "tax", Decimal("0"))
    service_raw = extraction.get("serviceCharge", extraction.get("service_charge"))
    service_charge = _to_decimal(service_raw, "service charge", Decimal("0"))

    subtotal = sum((li.price for li in line_items), Decimal("0"))
    total = _to_decimal(extraction.get("total"), "total", subtotal + tax + service_charge)

    receipt = _assemble(line_items, tax, service_charge, total)
    logger.info(f"Accepted receipt with {len(line_items)} line item(s), total {total}")
    return receipt


def build_manual_receipt(
    items: list[dict],
    tax: Decimal | None = None,
    service_charge: Decimal | None = None,
    total: Decimal | None = None,
) -> Receipt:
    token = uuid.uuid4().hex[:8]
    line_items = _build_line_items(items, token)

    tax = _to_decimal(tax, "tax", Decimal("0"))
    service_charge = _to_decimal(service_charge, "service charge", Decimal("0"))
    subtotal = sum((li.price for li in line_items), Decimal("0"))
    total = _to_decimal(total, "total", subtotal + tax + service_charge)

    return _assemble(line_items, tax, service_charge, total)
