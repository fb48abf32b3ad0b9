"""Domain events for the Notification aggregate."""

from notifications.domain import notifications
from protean.fields import DateTime, Identifier, String


@notifications.event(part_of="Notification")
class NotificationCreated:
    """A notification was recorded and queued for push dispatch."""

    __version__ = 1

    notification_id: Identifier(required=True)
    user_id: Identifier(required=True)
    notification_type: String(required=True)
    title: String(required=True)
    click_action: String()
    created_at: DateTime(required=True)


@notifications.event(part_of="Notification")
class NotificationSent:
    """The push channel accepted the notification."""

    __version__ = 1

    notification_id: Identifier(required=True)
    user_id: Identifier(required=True)
    sent_at: DateTime(required=True)


@notifications.event(part_of="Notification")
class NotificationFailed:
    """The push channel rejected the notification."""

    __version__ = 1

    notification_id: Identifier(required=True)
    user_id: Identifier(required=True)
    reason: String(required=True)
    failed_at: DateTime(required=True)


@notifications.event(part_of="Notification")
class NotificationRead:
    """The recipient opened the notification."""

    __version__ = 1

    notification_id: Identifier(required=True)
    user_id: Identifier(required=True)
    read_at: DateTime(required=True)
