"""Notification aggregate (CQRS): one in-app message to one user.

Notifications are created reactively from Ordering events and pushed to
the recipient's devices. The in-app record stays readable whatever the
push outcome.

State Machine (3 states):
    PENDING → SENT
    PENDING → FAILED

Read tracking (``is_read``) is independent of delivery status.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from notifications.domain import notifications
from notifications.notification.events import (
    NotificationCreated,
    NotificationFailed,
    NotificationRead,
    NotificationSent,
)
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String, Text


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class NotificationType(Enum):
    ORDER_ASSIGNED = "ORDER_ASSIGNED"
    ORDER_UNASSIGNED = "ORDER_UNASSIGNED"
    ORDER_DELIVERED = "ORDER_DELIVERED"
    ORDER_CANCELLED = "ORDER_CANCELLED"


class NotificationStatus(Enum):
    PENDING = "PENDING"
    SENT = "SENT"
    FAILED = "FAILED"


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------
_VALID_TRANSITIONS = {
    NotificationStatus.PENDING: {NotificationStatus.SENT, NotificationStatus.FAILED},
    NotificationStatus.SENT: set(),  # Terminal
    NotificationStatus.FAILED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@notifications.aggregate
class Notification:
    """A message addressed to a single user (rider or admin)."""

    # Recipient
    user_id: Identifier(required=True)

    # Content
    title: String(required=True, max_length=255)
    message: Text(required=True)
    notification_type: String(choices=NotificationType, required=True)
    data: Text()  # JSON: structured event context for the client
    click_action: String(max_length=500)

    # Delivery
    status: String(choices=NotificationStatus, default=NotificationStatus.PENDING.value)
    failure_reason: String(max_length=500)

    # Read tracking
    is_read: Boolean(default=False)

    # Timestamps
    created_at: DateTime()
    sent_at: DateTime()
    read_at: DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id, title, message, notification_type, data=None, click_action=None):
        """Create a new notification in PENDING status."""
        now = datetime.now(UTC)

        notification = cls(
            user_id=user_id,
            title=title,
            message=message,
            notification_type=notification_type,
            data=json.dumps(data) if data is not None else None,
            click_action=click_action,
            status=NotificationStatus.PENDING.value,
            is_read=False,
            created_at=now,
        )

        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                user_id=str(user_id),
                notification_type=notification_type,
                title=title,
                click_action=click_action,
                created_at=now,
            )
        )

        return notification

    @property
    def payload(self) -> dict:
        return json.loads(self.data) if self.data else {}

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = NotificationStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def mark_sent(self, sent_at=None):
        """Mark notification as accepted by the push channel."""
        self._assert_can_transition(NotificationStatus.SENT)

        now = sent_at or datetime.now(UTC)
        self.status = NotificationStatus.SENT.value
        self.sent_at = now

        self.raise_(NotificationSent(notification_id=str(self.id), user_id=str(self.user_id), sent_at=now))

    def mark_failed(self, reason):
        self._assert_can_transition(NotificationStatus.FAILED)

        now = datetime.now(UTC)
        self.status = NotificationStatus.FAILED.value
        self.failure_reason = reason

        self.raise_(
            NotificationFailed(
                notification_id=str(self.id),
                user_id=str(self.user_id),
                reason=reason,
                failed_at=now,
            )
        )

    def mark_read(self):
        """Record that the recipient opened the notification. Reading twice is a no-op."""
        if self.is_read:
            return

        now = datetime.now(UTC)
        self.is_read = True
        self.read_at = now

        self.raise_(NotificationRead(notification_id=str(self.id), user_id=str(self.user_id), read_at=now))
