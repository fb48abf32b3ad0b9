"""Tests for the fake push adapter and the channel registry."""

from notifications.channel import get_push_channel, reset_channels, set_push_channel
from notifications.channel.fake_push import FakePushAdapter
from notifications.channel.push_port import PushPort


class TestFakePushAdapter:
    def test_send_records_push(self):
        adapter = FakePushAdapter()
        result = adapter.send("user-1", "Title", "Body", data={"orderId": "o-1"}, click_action="/rider/orders/o-1")

        assert result["status"] == "sent"
        assert result["message_id"].startswith("push-")
        [push] = adapter.sent_pushes
        assert push["user_id"] == "user-1"
        assert push["click_action"] == "/rider/orders/o-1"

    def test_click_action_defaults_to_root(self):
        adapter = FakePushAdapter()
        adapter.send("user-1", "Title", "Body")
        assert adapter.sent_pushes[0]["click_action"] == "/"

    def test_configured_failure(self):
        adapter = FakePushAdapter()
        adapter.configure(should_succeed=False, failure_reason="Token expired")

        result = adapter.send("user-1", "Title", "Body")

        assert result == {"message_id": None, "status": "failed", "error": "Token expired"}
        assert adapter.sent_pushes == []

    def test_reset(self):
        adapter = FakePushAdapter()
        adapter.send("user-1", "Title", "Body")
        adapter.configure(should_succeed=False)

        adapter.reset()

        assert adapter.sent_pushes == []
        assert adapter.should_succeed is True


class TestChannelRegistry:
    def test_default_is_fake_singleton(self):
        reset_channels()
        adapter = get_push_channel()
        assert isinstance(adapter, FakePushAdapter)
        assert get_push_channel() is adapter

    def test_set_custom_adapter(self):
        class RecordingPush(PushPort):
            def send(self, user_id, title, body, data=None, click_action=None):
                return {"message_id": "x", "status": "sent"}

        custom = RecordingPush()
        set_push_channel(custom)
        assert get_push_channel() is custom
        reset_channels()
