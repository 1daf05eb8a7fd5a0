"""Decimal money helpers.

Ceiling postings carry an integer percent of face value; market postings carry
an explicit Decimal price. Everything shown to users is rounded half-up to cents.
"""

from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")

# largest value a NUMERIC(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")


def round2(value: Decimal | int | float | str) -> Decimal:
    """Round to two decimal places, half-up: 100.505 -> 100.51."""
    return Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)


def midpoint(a: Decimal, b: Decimal) -> Decimal:
    """Agreed price of a market match: (a + b) / 2 rounded to cents."""
    return round2((Decimal(a) + Decimal(b)) / 2)


def percent_of(face_value: Decimal | None, percent: int | float | Decimal) -> Decimal | None:
    """Convert a percent of face value into money; None when the face value is unknown."""
    if face_value is None:
        return None
    return round2(Decimal(face_value) * Decimal(str(percent)) / 100)


def to_display(amount: Decimal | None) -> str:
    """Decimal('65') -> '$65.00'; Decimal('-12.5') -> '-$12.50'; None -> '$0.00'."""
    value = round2(amount if amount is not None else 0)
    if value < 0:
        return f"-${-value:,.2f}"
    return f"${value:,.2f}"
