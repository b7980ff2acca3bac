"""
SessionStart Dispatcher - Announce a new Claude Code session.
"""
import os

from notch_hook.config import NotificationType
from notch_hook.dispatchers.base import SimpleDispatcher
from notch_hook.hook_sdk import EventKind, LifecycleEvent
from notch_hook.hook_utils import Notification, Priority, log_event


class SessionStartDispatcher(SimpleDispatcher):
    """SessionStart event dispatcher."""

    DISPATCHER_NAME = "session_start_handler"
    EVENT_KIND = EventKind.SESSION_START

    def handle(self, event: LifecycleEvent) -> Notification:
        log_event(self.DISPATCHER_NAME, "session_started", {"project": self.config.project_name})

        return self.notification(
            "🚀", "Session started",
            "Claude Code session started",
            NotificationType.AI,
            Priority.LOW,
            {
                "event_type": "session_start",
                # No session id on older payloads; the pid still groups one run
                "session_id": event.session_id or str(os.getpid()),
                "project": self.config.project_name,
            },
        )
