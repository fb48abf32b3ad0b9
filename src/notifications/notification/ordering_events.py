"""Inbound cross-domain event handler: Notifications reacts to Order events.

Riders hear about orders given to them, taken from them or cancelled by an
admin. Admins hear about deliveries and rider cancellations. Ordering
events carry the customer and rider context, so nothing is read back from
Ordering.
"""

import structlog
from notifications.domain import notifications
from notifications.notification.gateway import notify_with_template
from notifications.notification.notification import Notification
from notifications.staff.staff import StaffMember
from notifications.templates import Purpose
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.ordering import OrderCancelled, OrderDelivered, RiderAssigned, RiderReassigned

logger = structlog.get_logger(__name__)

notifications.register_external_event(RiderAssigned, "Ordering.RiderAssigned.v1")
notifications.register_external_event(RiderReassigned, "Ordering.RiderReassigned.v1")
notifications.register_external_event(OrderDelivered, "Ordering.OrderDelivered.v1")
notifications.register_external_event(OrderCancelled, "Ordering.OrderCancelled.v1")

CANCELLED_BY_ADMIN = "ADMIN"
CANCELLED_BY_RIDER = "RIDER"


def _rider_link(order_id) -> str:
    return f"/rider/orders/{order_id}"


def _admin_link(order_id) -> str:
    return f"/admin/orders/{order_id}"


def _currency() -> str:
    custom = current_domain.config.get("custom", {}) or {}
    return custom.get("CURRENCY_LABEL", "RS")


def _order_context(event) -> dict:
    return {
        "order_id": str(event.order_id),
        "customer_name": event.customer_name,
        "delivery_address": event.delivery_address,
        "number_of_bottles": event.number_of_bottles,
    }


def _order_data(event, **extra) -> dict:
    data = {
        "order_id": str(event.order_id),
        "number_of_bottles": event.number_of_bottles,
        "customer": {"id": str(event.customer_id), "name": event.customer_name},
    }
    data.update(extra)
    return data


def _active_admins() -> list[str]:
    return current_domain.repository_for(StaffMember).active_admin_user_ids()


@notifications.event_handler(part_of=Notification, stream_category="ordering::order")
class OrderingEventsHandler:
    """Reacts to Ordering domain events to notify riders and admins."""

    @handle(RiderAssigned)
    def on_rider_assigned(self, event: RiderAssigned) -> None:
        notify_with_template(
            Purpose.ORDER_ASSIGNED.value,
            [event.rider_user_id],
            _order_context(event),
            data=_order_data(event, priority=event.priority, total_amount=event.total_amount),
            click_action=_rider_link(event.order_id),
        )

    @handle(RiderReassigned)
    def on_rider_reassigned(self, event: RiderReassigned) -> None:
        """Tell the old rider to stop and the new rider to start."""
        context = _order_context(event)
        context.update(rider_name=event.rider_name, previous_rider_name=event.previous_rider_name)
        link = _rider_link(event.order_id)

        if event.previous_rider_user_id:
            notify_with_template(
                Purpose.REASSIGNED_AWAY.value,
                [event.previous_rider_user_id],
                context,
                data=_order_data(event),
                click_action=link,
            )
        notify_with_template(
            Purpose.REASSIGNED_TO.value,
            [event.rider_user_id],
            context,
            data=_order_data(event, priority=event.priority, total_amount=event.total_amount),
            click_action=link,
        )

    @handle(OrderDelivered)
    def on_order_delivered(self, event: OrderDelivered) -> None:
        admins = _active_admins()
        if not admins:
            logger.info("No active admins to notify of delivery", order_id=str(event.order_id))
            return

        context = _order_context(event)
        context.update(
            total_amount=event.total_amount,
            paid_amount=event.paid_amount,
            currency=_currency(),
        )
        notify_with_template(
            Purpose.ORDER_DELIVERED.value,
            admins,
            context,
            data=_order_data(
                event,
                rider={"id": str(event.rider_id), "name": event.rider_name} if event.rider_id else None,
                payment_amount=event.paid_amount,
                payment_status=event.payment_status,
                total_amount=event.total_amount,
            ),
            click_action=_admin_link(event.order_id),
        )

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        context = _order_context(event)
        context["rider_name"] = event.rider_name

        if event.cancelled_by == CANCELLED_BY_ADMIN:
            if not event.rider_user_id:
                logger.info("Cancelled order had no rider to notify", order_id=str(event.order_id))
                return
            notify_with_template(
                Purpose.CANCELLED_BY_ADMIN.value,
                [event.rider_user_id],
                context,
                data=_order_data(event),
                click_action=_rider_link(event.order_id),
            )
        elif event.cancelled_by == CANCELLED_BY_RIDER:
            if not event.rider_id:
                logger.info("Rider cancellation without a rider on the order", order_id=str(event.order_id))
                return
            notify_with_template(
                Purpose.CANCELLED_BY_RIDER.value,
                _active_admins(),
                context,
                data=_order_data(event, rider={"id": str(event.rider_id), "name": event.rider_name}),
                click_action=_admin_link(event.order_id),
            )
