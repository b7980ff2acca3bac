"""Tests for notification composition and socket delivery."""
import json

import pytest

from notch_hook.config import HookConfig
from notch_hook.hook_utils import (
    DeliveryResult,
    Notification,
    Priority,
    compose_notification,
    deliver,
    send_via_socket,
)


class TestComposeNotification:
    """Tests for compose_notification."""

    def test_baseline_metadata(self, hook_config, project_dir):
        notification = compose_notification(hook_config, "T", "M", "info", Priority.LOW)
        assert notification.metadata["source"] == "claude-code"
        assert notification.metadata["project"] == "demo"
        assert notification.metadata["project_path"] == str(project_dir)
        assert float(notification.metadata["session_duration"]) >= 0

    def test_event_keys_win(self, hook_config):
        notification = compose_notification(
            hook_config, "T", "M", "info", 1, {"project": "other", "count": 5}
        )
        assert notification.metadata["project"] == "other"
        assert notification.metadata["count"] == "5"

    def test_priority_clamped(self, hook_config):
        assert compose_notification(hook_config, "T", "M", "info", 9).priority == 3
        assert compose_notification(hook_config, "T", "M", "info", -2).priority == 0
        assert type(compose_notification(hook_config, "T", "M", "info", Priority.HIGH).priority) is int

    def test_wire_form(self):
        notification = Notification(title="T", message="M", type="info", priority=1, metadata={"a": "b"})
        assert json.loads(notification.to_wire()) == {
            "title": "T", "message": "M", "type": "info", "priority": 1, "metadata": {"a": "b"},
        }


class TestSocketDelivery:
    """Tests for send_via_socket and deliver."""

    def test_no_listener_reports_failure(self, hook_config):
        notification = compose_notification(hook_config, "T", "M", "info", 1)
        result = send_via_socket(notification, hook_config.socket_path, timeout=0.5)
        assert isinstance(result, DeliveryResult)
        assert not result.ok
        assert result.error.startswith("connect failed")

    @pytest.mark.parametrize("timeout", [-1.0, float("nan")])
    def test_invalid_timeout_reports_failure(self, hook_config, timeout):
        notification = compose_notification(hook_config, "T", "M", "info", 1)
        result = send_via_socket(notification, hook_config.socket_path, timeout=timeout)
        assert not result.ok
        assert result.error.startswith("invalid timeout")

    def test_deliver_with_bad_timeout_does_not_raise(self, hook_config):
        hook_config.socket_timeout = float("nan")
        result = deliver(hook_config, compose_notification(hook_config, "T", "M", "info", 1))
        assert not result.ok

    def test_env_timeout_never_breaks_delivery(self, monkeypatch, project_dir, short_tmp):
        monkeypatch.setenv("CLAUDE_PROJECT_DIR", str(project_dir))
        monkeypatch.setenv("NOTCH_SOCKET_PATH", str(short_tmp / "absent.sock"))
        monkeypatch.setenv("NOTCH_SOCKET_TIMEOUT", "-1")
        config = HookConfig.from_env()

        result = deliver(config, compose_notification(config, "T", "M", "info", 1))

        assert not result.ok
        assert result.error.startswith("connect failed")

    def test_deliver_does_not_raise_without_listener(self, hook_config):
        result = deliver(hook_config, compose_notification(hook_config, "T", "M", "info", 1))
        assert not result.ok

    def test_delivered_with_reply(self, live_config, socket_recorder):
        notification = compose_notification(live_config, "[demo] 🎉 Done", "All good", "celebration", 2)

        result = deliver(live_config, notification)

        assert result.ok
        assert result.response == b'{"success":true}'
        assert socket_recorder.wait()
        message = socket_recorder.messages[0]
        assert message["title"] == "[demo] 🎉 Done"
        assert message["priority"] == 2
        assert all(isinstance(v, str) for v in message["metadata"].values())

    def test_missing_reply_still_delivered(self, hook_config, silent_recorder):
        notification = compose_notification(hook_config, "T", "M", "info", 1)

        result = send_via_socket(notification, silent_recorder.path, timeout=1.0)

        assert result.ok
        assert result.response is None
        assert silent_recorder.wait()
