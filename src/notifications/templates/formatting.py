"""Text helpers shared by the message templates."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

DEFAULT_CURRENCY = "RS"


def bottle_text(count) -> str:
    count = int(count or 0)
    return f"{count} bottle" if count == 1 else f"{count} bottles"


def whole_amount(value) -> str:
    """Render an amount in whole currency units, e.g. ``"149.50"`` -> ``"150"``."""
    try:
        amount = Decimal(str(value if value is not None else 0))
    except InvalidOperation:
        return str(value)
    rounded = amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return str(rounded + 0)  # drops a negative zero


def order_line(context: dict, deliver: bool = True) -> str:
    """``Order for <name>, [deliver ]<n bottles> to <address>``."""
    verb = "deliver " if deliver else ""
    address = context.get("delivery_address") or "Address not provided"
    return (
        f"Order for {context.get('customer_name', 'customer')}, "
        f"{verb}{bottle_text(context.get('number_of_bottles'))} to {address}"
    )
