"""Cross-domain event contracts for Ordering domain events.

These classes define the event shape for consumption by other domains
(the Notifications domain tells riders and admins about assignments,
deliveries and cancellations). They are registered as external events via
domain.register_external_event() with matching __type__ strings so
Protean's stream deserialization works correctly.

The source-of-truth events are in src/ordering/order/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier, Integer, String


class RiderAssigned(BaseEvent):
    """A rider was given an order for the first time."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_name = String(required=True)
    delivery_address = String(required=True)
    number_of_bottles = Integer(required=True)
    priority = String(required=True)
    total_amount = String(required=True)
    rider_id = Identifier(required=True)
    rider_name = String(required=True)
    rider_user_id = Identifier()
    assigned_at = DateTime(required=True)


class RiderReassigned(BaseEvent):
    """An order moved from one rider to another."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_name = String(required=True)
    delivery_address = String(required=True)
    number_of_bottles = Integer(required=True)
    priority = String(required=True)
    total_amount = String(required=True)
    previous_rider_id = Identifier(required=True)
    previous_rider_name = String(required=True)
    previous_rider_user_id = Identifier()
    rider_id = Identifier(required=True)
    rider_name = String(required=True)
    rider_user_id = Identifier()
    reassigned_at = DateTime(required=True)


class OrderDelivered(BaseEvent):
    """A rider delivered an order and recorded the payment collected."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_name = String(required=True)
    delivery_address = String(required=True)
    number_of_bottles = Integer(required=True)
    rider_id = Identifier()
    rider_name = String()
    total_amount = String(required=True)
    paid_amount = String(required=True)
    receivable = String(required=True)
    payable = String(required=True)
    payment_status = String(required=True)
    payment_method = String(required=True)
    delivered_at = DateTime(required=True)


class OrderCancelled(BaseEvent):
    """An order was cancelled by an admin or by its rider."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_name = String(required=True)
    delivery_address = String(required=True)
    number_of_bottles = Integer(required=True)
    rider_id = Identifier()
    rider_name = String()
    rider_user_id = Identifier()
    previous_status = String(required=True)
    cancelled_by = String(required=True)
    reversed_amount = String(required=True)
    cancelled_at = DateTime(required=True)
