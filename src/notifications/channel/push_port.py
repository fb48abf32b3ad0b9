"""Push notification channel port: abstract interface for push dispatch."""

from abc import ABC, abstractmethod


class PushPort(ABC):
    """Abstract interface for push notification dispatch adapters.

    Adapters resolve a user's registered devices themselves; callers only
    know the user.
    """

    @abstractmethod
    def send(
        self,
        user_id: str,
        title: str,
        body: str,
        data: dict | None = None,
        click_action: str | None = None,
    ) -> dict:
        """Send a push notification to every device of ``user_id``.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
