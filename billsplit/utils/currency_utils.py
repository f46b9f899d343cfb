from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
import hashlib

from billsplit.core.config import settings


def _quantum(places: int | None = None) -> Decimal:
    places = settings.money_places if places is None else places
    return Decimal(1).scaleb(-places)


def round_money(amount: Decimal, places: int | None = None) -> Decimal:
    """Round a full-precision amount for display (half up)."""
    return Decimal(amount).quantize(_quantum(places), rounding=ROUND_HALF_UP)


def format_money(amount: Decimal, currency: str | None = None) -> str:
    currency = settings.currency if currency is None else currency
    return f"{currency} {round_money(amount):,.{settings.money_places}f}"


def to_units(amount: Decimal) -> int:
    """Whole number of currency units in amount, rounded half up."""
    return int((Decimal(amount) / _quantum()).to_integral_value(rounding=ROUND_HALF_UP))


def allocate_units(exact_amounts: dict, target_units: int, seed: str | None = None) -> dict:
    """
    Round amounts to the currency unit so they sum to target_units units.

    Every amount is floored, then the units lost to flooring go to the ids with
    the largest remainders. Ids whose amount is already a whole number of units
    never receive an extra unit. Ties on the remainder are broken by a seeded md5
    hash of the id when seed is provided, otherwise by the id itself.
    """
    quantum = _quantum()
    base_units = {}
    remainders = {}
    for uid, amount in exact_amounts.items():
        units = Decimal(amount) / quantum
        base_units[uid] = int(units.to_integral_value(rounding=ROUND_DOWN))
        remainders[uid] = units - base_units[uid]

    if seed:
        def tiebreak(uid):
            return hashlib.md5(f"{seed}:{uid}".encode()).hexdigest()
    else:
        tiebreak = str

    candidates = sorted(
        (uid for uid in exact_amounts if remainders[uid] > 0),
        key=lambda uid: (-remainders[uid], tiebreak(uid)),
    )
    extra_count = target_units - sum(base_units.values())
    lucky = set(candidates[:max(extra_count, 0)])

    # Keep the caller's ordering
    return {
        uid: Decimal(base_units[uid] + (1 if uid in lucky else 0)) * quantum
        for uid in exact_amounts
    }


def distribute_cents(exact_totals: dict, seed: str | None = None) -> dict:
    """
    Round per-person amounts so the rounded values sum exactly to the rounded
    grand total.

    The units lost to flooring go to the largest remainders first. If seed is
    provided, it deterministically shuffles people with equal remainders, so the
    same people do not always receive the extra unit.

    Args:
        exact_totals: Mapping of participant id to unrounded amount (Decimal).
        seed: Optional string seed (e.g. session id) for pseudo-random tiebreaks.

    Returns:
        Dictionary mapping participant id to its rounded amount (Decimal).
    """
    if not exact_totals:
        return {}

    grand_total = sum(exact_totals.values(), Decimal("0"))
    return allocate_units(exact_totals, to_units(grand_total), seed=seed)
