"""Order amendment: command and handler.

Only PENDING, ASSIGNED and IN_PROGRESS orders can be amended. The order
keeps its balance snapshot; the customer's ledger swaps the old charge for
the new one.
"""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.domain import ordering
from ordering.order.creation import load_rider
from ordering.order.ledger import LedgerTransition, apply_ledger_transition
from ordering.order.order import Order


@ordering.command(part_of="Order")
class AmendOrder:
    order_id = Identifier(required=True)
    number_of_bottles = Integer(required=True)
    unit_price = String(required=True, max_length=32)
    notes = Text()
    priority = String(max_length=20)
    rider_id = Identifier()


@ordering.command_handler(part_of=Order)
class AmendOrderHandler:
    @handle(AmendOrder)
    def amend_order(self, command):
        order = current_domain.repository_for(Order).get(command.order_id)
        customer = current_domain.repository_for(Customer).get(order.customer_id)
        apply_ledger_transition(
            LedgerTransition.AMEND,
            customer,
            order,
            number_of_bottles=command.number_of_bottles,
            unit_price=command.unit_price,
            notes=command.notes,
            priority=command.priority,
            rider=load_rider(command.rider_id),
        )
