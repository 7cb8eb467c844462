from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

ZERO = Decimal("0")
CENT = Decimal("0.01")


def parse_price(value: object) -> Decimal:
    """Read a stored or submitted amount as a non-negative ``Decimal`` in whole cents.

    Older clients wrote float artifacts such as ``0.30000000000000004``;
    those round back to the cent they stood for.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError("price must be a number")
    try:
        price = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"price is not a number: {value!r}") from exc
    if not price.is_finite():
        raise ValueError("price must be finite")
    if price < ZERO:
        raise ValueError("price must be >= 0")
    try:
        return price.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"price is too large: {value!r}") from exc


def is_whole_cents(amount: Decimal) -> bool:
    return amount.is_finite() and amount.normalize().as_tuple().exponent >= -2


def line_total(price: Decimal, quantity: int) -> Decimal:
    return price * quantity


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def to_json_number(amount: Decimal) -> int | float | str:
    if amount == amount.to_integral_value():
        return int(amount)
    as_float = float(amount)
    # Amounts a float cannot carry exactly are stored as decimal strings.
    if Decimal(repr(as_float)) != amount:
        return str(amount)
    return as_float
