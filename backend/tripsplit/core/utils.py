"""
Utility functions for the application.
"""
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP

CENTS = Decimal("0.01")


def round_amount(value: Decimal, unit: Decimal = CENTS) -> Decimal:
    """Round a currency amount for display (half up)."""
    rounded = value.quantize(unit, rounding=ROUND_HALF_UP)
    # Avoid showing "-0.00"
    if not rounded:
        return Decimal(0).quantize(unit)
    return rounded


def round_whole(value: Decimal) -> Decimal:
    """Round to whole units with halves going toward +infinity (-100.5 -> -100)."""
    rounded = (value + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR)
    if not rounded:
        return Decimal(0)
    return rounded


def format_signed_amount(value: Decimal) -> str:
    """Format an amount rounded to whole units, with '+' for positive values."""
    rounded = round_whole(value)
    sign = "+" if rounded > 0 else ""
    return f"{sign}{rounded}"
