"""Order assigned template: sent to a rider who was given an order."""

from notifications.notification.notification import NotificationType
from notifications.templates.formatting import order_line


class OrderAssignedTemplate:
    notification_type = NotificationType.ORDER_ASSIGNED.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "New Order Assigned",
            "message": order_line(context),
        }
