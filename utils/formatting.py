# utils/formatting.py
from decimal import Decimal, ROUND_HALF_UP, localcontext

CENTS = Decimal("0.01")


def format_price(amount: Decimal) -> str:
    """
    Format a decimal amount with exactly two fractional digits.
    Example: Decimal("12") -> "12.00", Decimal("33.499") -> "33.50"
    """
    with localcontext() as ctx:
        # every integer digit, a possible carry and two cents must fit
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        return f"{amount.quantize(CENTS, rounding=ROUND_HALF_UP):f}"


def display_value(value: str, placeholder: str = "-") -> str:
    """Card text for a possibly-empty field."""
    return value if value.strip() else placeholder
