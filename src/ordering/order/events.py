"""Domain events for the Order aggregate.

Events are immutable facts published after the unit of work commits. They
carry enough denormalized context (customer name and address, rider
details, amounts) for downstream consumers such as the Notifications domain
to act without reading back into Ordering. Amounts are serialized decimals.
"""

from protean.fields import DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderCreated:
    """A delivery, walk-in or en-route order was placed and charged to the customer."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_name = String(required=True)
    order_type = String(required=True)
    status = String(required=True)
    priority = String(required=True)
    number_of_bottles = Integer(required=True)
    unit_price = String(required=True)
    current_order_amount = String(required=True)
    customer_balance = String(required=True)  # balance before this order
    total_amount = String(required=True)
    rider_id = Identifier()
    created_at = DateTime(required=True)


@ordering.event(part_of="Order")
class RiderAssigned:
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


@ordering.event(part_of="Order")
class RiderReassigned:
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


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An order moved forward without a settlement (e.g. a rider set off)."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderDelivered:
    """A rider handed over the bottles and recorded what the customer paid."""

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


@ordering.event(part_of="Order")
class WalkInCompleted:
    """A walk-in sale was paid for at the counter."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    number_of_bottles = Integer(required=True)
    total_amount = String(required=True)
    paid_amount = String(required=True)
    receivable = String(required=True)
    payable = String(required=True)
    payment_status = String(required=True)
    payment_method = String(required=True)
    completed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """An order was cancelled and its effect on the customer's balance reversed."""

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


@ordering.event(part_of="Order")
class OrderAmended:
    """An in-progress order's bottle count or price changed."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    previous_number_of_bottles = Integer(required=True)
    number_of_bottles = Integer(required=True)
    unit_price = String(required=True)
    previous_order_amount = String(required=True)
    current_order_amount = String(required=True)
    total_amount = String(required=True)
    amended_at = DateTime(required=True)


@ordering.event(part_of="Order")
class BillCleared:
    """A customer settled (part of) their outstanding balance without a delivery."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_name = String(required=True)
    balance_before = String(required=True)
    paid_amount = String(required=True)
    receivable = String(required=True)
    payable = String(required=True)
    payment_status = String(required=True)
    payment_method = String(required=True)
    cleared_at = DateTime(required=True)
