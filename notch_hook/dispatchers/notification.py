"""
Notification Dispatcher - Claude Code is waiting on the user.

Fired when a permission dialog or an idle prompt is shown. Always urgent.
"""
from notch_hook.config import NotificationType
from notch_hook.dispatchers.base import SimpleDispatcher
from notch_hook.hook_sdk import EventKind, LifecycleEvent
from notch_hook.hook_utils import Notification, Priority, log_event


class NotificationDispatcher(SimpleDispatcher):
    """Notification event dispatcher."""

    DISPATCHER_NAME = "notification_handler"
    EVENT_KIND = EventKind.NOTIFICATION

    def handle(self, event: LifecycleEvent) -> Notification:
        log_event(self.DISPATCHER_NAME, "waiting_for_user", {
            "notification_type": event.get_str("notification_type") or "",
        })

        extra = {}
        message = event.get_str("message")
        if message:
            extra["notification_message"] = message

        return self.notification(
            "🔔", "Your response is needed",
            "Claude is waiting for your choice, check the Claude Code window",
            NotificationType.REMINDER,
            Priority.URGENT,
            extra,
        )
