"""Order settlement: delivery and walk-in completion commands and handler."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.domain import ordering
from ordering.order.ledger import LedgerTransition, apply_ledger_transition
from ordering.order.order import Order, PaymentMethod


@ordering.command(part_of="Order")
class DeliverOrder:
    """A rider handed over the bottles and collected ``payment_amount``."""

    order_id = Identifier(required=True)
    payment_amount = String(max_length=32, default="0")
    payment_method = String(max_length=20, default=PaymentMethod.CASH.value)
    payment_notes = Text()


@ordering.command(part_of="Order")
class CompleteWalkInOrder:
    order_id = Identifier(required=True)
    payment_amount = String(max_length=32, default="0")
    payment_method = String(max_length=20, default=PaymentMethod.CASH.value)
    payment_notes = Text()


@ordering.command_handler(part_of=Order)
class SettleOrderHandler:
    def _settle(self, transition, command):
        order = current_domain.repository_for(Order).get(command.order_id)
        customer = current_domain.repository_for(Customer).get(order.customer_id)
        apply_ledger_transition(
            transition,
            customer,
            order,
            payment_amount=command.payment_amount,
            payment_method=command.payment_method,
            payment_notes=command.payment_notes,
        )

    @handle(DeliverOrder)
    def deliver_order(self, command):
        self._settle(LedgerTransition.DELIVER, command)

    @handle(CompleteWalkInOrder)
    def complete_walkin_order(self, command):
        self._settle(LedgerTransition.COMPLETE_WALKIN, command)
