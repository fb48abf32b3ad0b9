"""Cancellation templates: admin cancels tell the rider, rider cancels tell the admins."""

from notifications.notification.notification import NotificationType
from notifications.templates.formatting import order_line


class CancelledByAdminTemplate:
    notification_type = NotificationType.ORDER_CANCELLED.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Order Cancelled",
            "message": f"Order cancelled by admin. {order_line(context, deliver=False)}.",
        }


class CancelledByRiderTemplate:
    notification_type = NotificationType.ORDER_CANCELLED.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Rider Cancelled Order",
            "message": (
                f"Order cancelled by rider {context.get('rider_name', 'unknown')}. "
                f"{order_line(context, deliver=False)}."
            ),
        }
