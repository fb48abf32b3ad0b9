"""Order assignment and status updates: command and handler.

Assignment does not move money, so it touches only the Order aggregate.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.creation import load_rider
from ordering.order.order import Order


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    """Set ASSIGNED or IN_PROGRESS, optionally handing the order to a (new) rider."""

    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    rider_id = Identifier()


@ordering.command_handler(part_of=Order)
class AssignOrderHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_status(command.status, rider=load_rider(command.rider_id))
        repo.add(order)
