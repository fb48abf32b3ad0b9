"""Balance reconciliation engine.

Pure functions with no I/O. Given what is owed and what was paid, derive the
payment status, the receivable/payable split and the customer's next
balance. Delivery, walk-in completion and bill clearing all settle through
here.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from ordering.ledger.money import ZERO, to_amount


class PaymentStatus(Enum):
    NOT_PAID = "NOT_PAID"
    PARTIAL = "PARTIAL"
    PAID = "PAID"
    OVERPAID = "OVERPAID"
    REFUND = "REFUND"


@dataclass(frozen=True)
class Settlement:
    """Outcome of settling a payment against an amount owed.

    ``paid_amount`` is the signed amount recorded on the order and
    subtracted from the customer's balance.
    """

    payment_status: PaymentStatus
    receivable: Decimal
    payable: Decimal
    paid_amount: Decimal


def payment_status_for(total, paid) -> PaymentStatus:
    total = to_amount(total)
    paid = to_amount(paid)

    if paid == ZERO:
        return PaymentStatus.NOT_PAID
    if paid < ZERO:
        return PaymentStatus.REFUND
    if paid < total:
        return PaymentStatus.PARTIAL
    if paid == total:
        return PaymentStatus.PAID
    return PaymentStatus.OVERPAID


def split_remaining(remaining) -> tuple[Decimal, Decimal]:
    """Split a signed remainder into ``(receivable, payable)``; at most one is non-zero."""
    remaining = to_amount(remaining)
    if remaining > ZERO:
        return remaining, ZERO
    if remaining < ZERO:
        return ZERO, -remaining
    return ZERO, ZERO


def reconcile(total, paid) -> Settlement:
    """Settle ``paid`` against ``total`` for deliveries and walk-in sales."""
    total = to_amount(total)
    paid = to_amount(paid)
    receivable, payable = split_remaining(total - paid)
    return Settlement(
        payment_status=payment_status_for(total, paid),
        receivable=receivable,
        payable=payable,
        paid_amount=paid,
    )


def apply_to_balance(current_balance, paid) -> Decimal:
    return to_amount(current_balance) - to_amount(paid)


def reconcile_clear_bill(balance, paid) -> Settlement:
    """Settle a standalone bill-clearing payment against the customer's balance.

    A positive balance is money the customer owes, so ``paid`` reduces it.
    A negative balance is money the business owes, so ``paid`` is money
    handed out: its sign is inverted before it touches the balance, and the
    order records it as a negative ``paid_amount``.
    """
    balance = to_amount(balance)
    paid = to_amount(paid)

    if balance > ZERO:
        outstanding = balance
        adjusted_paid = paid
    else:
        outstanding = -balance
        adjusted_paid = -paid

    remaining = outstanding - paid
    if remaining == ZERO:
        status = PaymentStatus.PAID
        receivable, payable = ZERO, ZERO
    elif remaining < ZERO:
        status = PaymentStatus.OVERPAID
        receivable, payable = ZERO, -remaining
    elif paid > ZERO:
        status = PaymentStatus.PARTIAL
        receivable, payable = remaining, ZERO
    else:
        status = PaymentStatus.NOT_PAID
        receivable, payable = remaining, ZERO

    # For a payable balance the roles flip: what is left is still owed to
    # the customer, and an overpayment leaves the customer owing us.
    if balance < ZERO:
        receivable, payable = payable, receivable

    return Settlement(
        payment_status=status,
        receivable=receivable,
        payable=payable,
        paid_amount=adjusted_paid,
    )
