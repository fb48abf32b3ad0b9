"""Order placement: command and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.domain import ordering
from ordering.order.ledger import LedgerTransition, apply_ledger_transition
from ordering.order.order import Order, OrderType, Priority
from ordering.rider.rider import Rider


@ordering.command(part_of="Order")
class CreateOrder:
    """Place an order. ``customer_id`` may be the walk-in alias."""

    customer_id = String(required=True, max_length=255)
    order_type = String(max_length=20, default=OrderType.DELIVERY.value)
    number_of_bottles = Integer(required=True)
    unit_price = String(required=True, max_length=32)
    rider_id = Identifier()
    notes = Text()
    priority = String(max_length=20, default=Priority.NORMAL.value)


def load_rider(rider_id):
    if not rider_id:
        return None
    return current_domain.repository_for(Rider).get(rider_id)


@ordering.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        customer = current_domain.repository_for(Customer).resolve(command.customer_id)
        order = apply_ledger_transition(
            LedgerTransition.CREATE,
            customer,
            number_of_bottles=command.number_of_bottles,
            unit_price=command.unit_price,
            order_type=command.order_type or OrderType.DELIVERY.value,
            rider=load_rider(command.rider_id),
            notes=command.notes,
            priority=command.priority,
        )
        return str(order.id)
