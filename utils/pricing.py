# utils/pricing.py
"""
Derived total price for an order.

Parsing is locale independent and strict: "1,5", "1e3", "NaN" and "1_000"
are unparseable, and an unparseable input is reported as None, never as 0.
"""
import re
from decimal import Decimal, localcontext
from typing import Optional

from utils.formatting import format_price

_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def _span(value: Decimal) -> int:
    """Digits needed to hold `value` exactly: integer part plus fraction."""
    return max(value.adjusted() + 1, 1) + max(-value.as_tuple().exponent, 0)


def parse_decimal(text: str) -> Optional[Decimal]:
    """
    Parse a plain decimal such as "10", "10.5", "10." or ".5".
    Returns None when `text` isn't a non-negative decimal.
    """
    if text is None:
        return None
    candidate = str(text).strip()
    if not _DECIMAL_RE.match(candidate):
        return None
    value = Decimal(candidate)
    if value < 0:
        return None
    return value


def parse_quantity(text: str) -> Optional[int]:
    """Parse a non-negative whole quantity; "2.5" and "abc" give None."""
    if text is None:
        return None
    candidate = str(text).strip()
    if not _INTEGER_RE.match(candidate):
        return None
    value = int(candidate)
    if value < 0:
        return None
    return value


def compute_total_price(unit_price: str, quantity: str, delivery_charges: str) -> str:
    """
    unit_price * quantity + delivery_charges, formatted with two decimals.
    Returns "" if any input can't be parsed, so a stale total is never kept.
    """
    price = parse_decimal(unit_price)
    qty = parse_quantity(quantity)
    delivery = parse_decimal(delivery_charges)

    if price is None or qty is None or delivery is None:
        return ""

    with localcontext() as ctx:
        # exact arithmetic: enough digits for the full product and sum
        ctx.prec = max(ctx.prec, _span(price) + len(str(qty)) + _span(delivery) + 2)
        return format_price(price * qty + delivery)
