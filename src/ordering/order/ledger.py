"""Ledger transitions: one primitive that moves an order and its customer together.

Each lifecycle step changes the order and posts the matching entry to the
customer's ledger. Command handlers call ``apply_ledger_transition`` inside
their unit of work, so both aggregates are committed together or not at
all. The aggregate versions guard against concurrent writers; a stale
write surfaces as ``ExpectedVersionError``.

    CREATE          CHARGE      +order amount
    DELIVER         PAYMENT     -paid amount
    COMPLETE_WALKIN PAYMENT     -paid amount
    CLEAR_BILL      SETTLEMENT  -adjusted paid amount
    AMEND           REVERSAL of the old charge, then CHARGE of the new amount
    CANCEL          REVERSAL    -(everything the order has posted)
"""

from enum import Enum

import structlog
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer, EntryKind
from ordering.ledger.money import ZERO, format_amount
from ordering.ledger.reconciliation import apply_to_balance
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


class LedgerTransition(Enum):
    CREATE = "CREATE"
    DELIVER = "DELIVER"
    COMPLETE_WALKIN = "COMPLETE_WALKIN"
    CLEAR_BILL = "CLEAR_BILL"
    AMEND = "AMEND"
    CANCEL = "CANCEL"


def _create(customer, order, **params):
    order = Order.create(customer, **params)
    customer.post(order.id, EntryKind.CHARGE, order.order_amount)
    return order


def _post_payment(customer, order, kind, paid):
    """Post the one entry that moves the balance to ``apply_to_balance(balance, paid)``."""
    movement = apply_to_balance(customer.balance, paid) - customer.balance
    if movement != ZERO:
        customer.post(order.id, kind, movement)


def _deliver(customer, order, **params):
    settlement = order.deliver(**params)
    _post_payment(customer, order, EntryKind.PAYMENT, settlement.paid_amount)
    return order


def _complete_walkin(customer, order, **params):
    settlement = order.complete_walkin(**params)
    _post_payment(customer, order, EntryKind.PAYMENT, settlement.paid_amount)
    return order


def _clear_bill(customer, order, **params):
    order = Order.clear_bill(customer, **params)
    _post_payment(customer, order, EntryKind.SETTLEMENT, order.paid_amount_value)
    return order


def _amend(customer, order, **params):
    previous_amount = order.amend(**params)
    if previous_amount != order.order_amount:
        customer.post(order.id, EntryKind.REVERSAL, -previous_amount)
        customer.post(order.id, EntryKind.CHARGE, order.order_amount)
    return order


def _cancel(customer, order, **params):
    net = customer.net_effect_of(order.id)
    order.cancel(reversed_amount=-net, **params)
    customer.reverse(order.id)
    return order


_STEPS = {
    LedgerTransition.CREATE: _create,
    LedgerTransition.DELIVER: _deliver,
    LedgerTransition.COMPLETE_WALKIN: _complete_walkin,
    LedgerTransition.CLEAR_BILL: _clear_bill,
    LedgerTransition.AMEND: _amend,
    LedgerTransition.CANCEL: _cancel,
}


def apply_ledger_transition(transition: LedgerTransition, customer: Customer, order: Order | None = None, **params):
    """Apply ``transition`` to ``order`` and ``customer`` and stage both for commit.

    CREATE and CLEAR_BILL build the order, so ``order`` is omitted for them.
    Returns the (possibly new) order.
    """
    balance_before = customer.balance
    order = _STEPS[transition](customer, order, **params)

    current_domain.repository_for(Order).add(order)
    current_domain.repository_for(Customer).add(customer)

    logger.info(
        "Ledger transition applied",
        transition=transition.value,
        order_id=str(order.id),
        customer_id=str(customer.id),
        status=order.status,
        balance_before=format_amount(balance_before),
        balance_after=customer.current_balance,
    )
    return order
