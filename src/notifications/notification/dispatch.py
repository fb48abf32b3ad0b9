"""Internal dispatch handler: pushes notifications through the push channel.

Reacts to NotificationCreated events, sends the notification through the
push adapter and marks it SENT or FAILED. The in-app record is kept either
way.
"""

import structlog
from notifications.channel import get_push_channel
from notifications.domain import notifications
from notifications.notification.events import NotificationCreated
from notifications.notification.notification import Notification, NotificationStatus
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

logger = structlog.get_logger(__name__)


@notifications.event_handler(part_of=Notification)
class NotificationDispatcher:
    """Pushes notifications to the recipient's devices when they are created."""

    @handle(NotificationCreated)
    def on_notification_created(self, event: NotificationCreated) -> None:
        repo = current_domain.repository_for(Notification)
        try:
            notification = repo.get(event.notification_id)
        except ObjectNotFoundError:
            logger.error(
                "Failed to load notification for dispatch",
                notification_id=str(event.notification_id),
            )
            return

        # Only dispatch PENDING notifications
        if NotificationStatus(notification.status) != NotificationStatus.PENDING:
            logger.info(
                "Notification not in PENDING status, skipping dispatch",
                notification_id=str(event.notification_id),
                status=notification.status,
            )
            return

        try:
            result = get_push_channel().send(
                user_id=str(notification.user_id),
                title=notification.title,
                body=notification.message,
                data={
                    "orderId": notification.payload.get("order_id", ""),
                    "type": notification.notification_type,
                },
                click_action=notification.click_action,
            )
            if result.get("status") == "sent":
                notification.mark_sent()
            else:
                notification.mark_failed(result.get("error", "Unknown dispatch error"))
        except Exception as e:
            notification.mark_failed(str(e))
            logger.error(
                "Push dispatch failed",
                notification_id=str(notification.id),
                error=str(e),
            )

        repo.add(notification)
