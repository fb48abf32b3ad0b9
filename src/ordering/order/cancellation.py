"""Order cancellation: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.domain import ordering
from ordering.order.ledger import LedgerTransition, apply_ledger_transition
from ordering.order.order import CancelledBy, Order


@ordering.command(part_of="Order")
class CancelOrder:
    """Cancel an order and reverse its effect on the customer's balance."""

    order_id = Identifier(required=True)
    cancelled_by = String(max_length=20, default=CancelledBy.ADMIN.value)


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = current_domain.repository_for(Order).get(command.order_id)
        customer = current_domain.repository_for(Customer).get(order.customer_id)
        apply_ledger_transition(
            LedgerTransition.CANCEL,
            customer,
            order,
            cancelled_by=command.cancelled_by,
        )
