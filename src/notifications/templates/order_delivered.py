"""Order delivered template: sent to every active admin with a settlement summary."""

from decimal import Decimal

from notifications.notification.notification import NotificationType
from notifications.templates.formatting import DEFAULT_CURRENCY, whole_amount


class OrderDeliveredTemplate:
    notification_type = NotificationType.ORDER_DELIVERED.value

    @staticmethod
    def render(context: dict) -> dict:
        currency = context.get("currency") or DEFAULT_CURRENCY
        total = Decimal(str(context.get("total_amount") or 0))
        paid = Decimal(str(context.get("paid_amount") or 0))
        remaining = total - paid

        summary = (
            f"Order delivered to {context.get('customer_name', 'customer')}. "
            f"Total: {currency} {whole_amount(total)}, Received: {currency} {whole_amount(paid)}"
        )
        if remaining == 0:
            summary += ", Fully paid."
        elif remaining > 0:
            summary += f", Remaining: {currency} {whole_amount(remaining)}"
        else:
            summary += f", Overpaid: {currency} {whole_amount(-remaining)}"

        return {"title": "Order Delivered", "message": summary}
