"""Notification dispatch gateway: record one notification per recipient.

Notifying is best-effort: a failure to record a notification is logged and
swallowed so that it can never undo the order change that triggered it.
"""

import structlog
from notifications.notification.notification import Notification
from notifications.templates import get_template
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)


def notify(user_id, title, message, notification_type, data=None, click_action=None) -> str | None:
    """Record a notification for ``user_id``. Returns its id, or None if it could not be recorded."""
    if not user_id:
        logger.info("Notification skipped, recipient has no user account", title=title)
        return None

    try:
        notification = Notification.create(
            user_id=str(user_id),
            title=title,
            message=message,
            notification_type=notification_type,
            data=data,
            click_action=click_action,
        )
        current_domain.repository_for(Notification).add(notification)
    except Exception as e:
        logger.error(
            "Failed to record notification",
            user_id=str(user_id),
            notification_type=notification_type,
            error=str(e),
        )
        return None

    logger.info(
        "Notification recorded",
        user_id=str(user_id),
        notification_type=notification_type,
        notification_id=str(notification.id),
    )
    return str(notification.id)


def notify_many(user_ids, title, message, notification_type, data=None, click_action=None) -> list[str]:
    """Record the same notification for each user. Failures for one user do not stop the rest."""
    notification_ids = []
    for user_id in user_ids:
        notification_id = notify(user_id, title, message, notification_type, data, click_action)
        if notification_id:
            notification_ids.append(notification_id)
    return notification_ids


def notify_with_template(purpose: str, user_ids, context: dict, data=None, click_action=None) -> list[str]:
    """Render the template registered for ``purpose`` and notify each user."""
    template_cls = get_template(purpose)
    rendered = template_cls.render(context)
    return notify_many(
        user_ids,
        title=rendered["title"],
        message=rendered["message"],
        notification_type=template_cls.notification_type,
        data=data,
        click_action=click_action,
    )
