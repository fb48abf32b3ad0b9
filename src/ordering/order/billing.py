"""Bill clearing: command and handler.

A clear-bill settles a customer's outstanding balance in either direction:
the customer paying what they owe, or the business paying back credit.
"""

from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.domain import ordering
from ordering.order.ledger import LedgerTransition, apply_ledger_transition
from ordering.order.order import Order, PaymentMethod, Priority


@ordering.command(part_of="Order")
class ClearBill:
    customer_id = String(required=True, max_length=255)
    paid_amount = String(required=True, max_length=32)
    payment_method = String(max_length=20, default=PaymentMethod.CASH.value)
    payment_notes = Text()
    priority = String(max_length=20, default=Priority.NORMAL.value)


@ordering.command_handler(part_of=Order)
class ClearBillHandler:
    @handle(ClearBill)
    def clear_bill(self, command):
        customer = current_domain.repository_for(Customer).resolve(command.customer_id)
        order = apply_ledger_transition(
            LedgerTransition.CLEAR_BILL,
            customer,
            paid_amount=command.paid_amount,
            payment_method=command.payment_method,
            payment_notes=command.payment_notes,
            priority=command.priority,
        )
        return str(order.id)
