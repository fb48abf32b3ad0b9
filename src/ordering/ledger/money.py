"""Exact currency amounts.

Amounts are held as ``Decimal`` quantized to two places and persisted as
canonical decimal strings, so no binary-float rounding ever reaches a
customer balance.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from protean.exceptions import ValidationError

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_amount(value, field: str = "amount") -> Decimal:
    """Coerce ``value`` (str, int, float, Decimal or None) to a quantized Decimal.

    Floats are converted through ``str`` so ``0.1`` becomes ``Decimal("0.10")``
    rather than its binary expansion.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError({field: [f"'{value}' is not a valid amount"]}) from None
    if not amount.is_finite():
        raise ValidationError({field: [f"'{value}' is not a valid amount"]})
    amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    # Normalize negative zero so "-0.00" is never persisted
    return ZERO if amount.is_zero() else amount


def format_amount(value) -> str:
    """Serialize an amount for storage, e.g. ``Decimal("100")`` -> ``"100.00"``."""
    return str(to_amount(value))
