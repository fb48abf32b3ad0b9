"""Reassignment templates: one for the rider losing the order, one for the rider getting it."""

from notifications.notification.notification import NotificationType
from notifications.templates.formatting import order_line


class OrderReassignedAwayTemplate:
    """Tells the previous rider to stop."""

    notification_type = NotificationType.ORDER_UNASSIGNED.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Order Re-assigned",
            "message": (
                f"This order has been reassigned to {context.get('rider_name', 'another rider')}. "
                f"{order_line(context, deliver=False)}. Do not deliver."
            ),
        }


class OrderReassignedToTemplate:
    """Tells the new rider where the order came from."""

    notification_type = NotificationType.ORDER_ASSIGNED.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "New Order Assigned",
            "message": (
                f"This order has been reassigned to you from "
                f"{context.get('previous_rider_name', 'another rider')}. {order_line(context)}."
            ),
        }
