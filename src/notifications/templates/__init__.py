"""Template registry: maps a notification purpose to its template class.

Each template knows its NotificationType and how to render a title and
message from event context data. Several purposes can share a type
(a reassignment is ORDER_ASSIGNED for the new rider).
"""

from enum import Enum

from notifications.templates.order_assigned import OrderAssignedTemplate
from notifications.templates.order_cancelled import CancelledByAdminTemplate, CancelledByRiderTemplate
from notifications.templates.order_delivered import OrderDeliveredTemplate
from notifications.templates.order_reassigned import OrderReassignedAwayTemplate, OrderReassignedToTemplate


class Purpose(Enum):
    ORDER_ASSIGNED = "order_assigned"
    REASSIGNED_AWAY = "reassigned_away"
    REASSIGNED_TO = "reassigned_to"
    ORDER_DELIVERED = "order_delivered"
    CANCELLED_BY_ADMIN = "cancelled_by_admin"
    CANCELLED_BY_RIDER = "cancelled_by_rider"


TEMPLATE_REGISTRY: dict[str, type] = {
    Purpose.ORDER_ASSIGNED.value: OrderAssignedTemplate,
    Purpose.REASSIGNED_AWAY.value: OrderReassignedAwayTemplate,
    Purpose.REASSIGNED_TO.value: OrderReassignedToTemplate,
    Purpose.ORDER_DELIVERED.value: OrderDeliveredTemplate,
    Purpose.CANCELLED_BY_ADMIN.value: CancelledByAdminTemplate,
    Purpose.CANCELLED_BY_RIDER.value: CancelledByRiderTemplate,
}


def get_template(purpose: str):
    """Look up a template class by purpose string."""
    template_cls = TEMPLATE_REGISTRY.get(purpose)
    if template_cls is None:
        raise ValueError(f"No template registered for purpose: {purpose}")
    return template_cls
