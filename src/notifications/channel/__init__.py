"""Push channel registry.

Provides singleton access to the push adapter. Uses the fake adapter by
default; a real provider (FCM, APNs) plugs in behind ``PushPort``.
"""

from notifications.channel.push_port import PushPort

_push_instance: PushPort | None = None


def get_push_channel() -> PushPort:
    """Return the configured push adapter (singleton)."""
    global _push_instance
    if _push_instance is None:
        from notifications.channel.fake_push import FakePushAdapter

        _push_instance = FakePushAdapter()
    return _push_instance


def set_push_channel(adapter: PushPort) -> None:
    global _push_instance
    _push_instance = adapter


def reset_channels():
    """Drop the push singleton (useful for testing)."""
    global _push_instance
    _push_instance = None
