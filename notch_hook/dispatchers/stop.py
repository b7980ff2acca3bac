"""
Stop Dispatcher - Announce the end of an agent turn.
"""
from notch_hook.config import NotificationType
from notch_hook.dispatchers.base import SimpleDispatcher
from notch_hook.hook_sdk import EventKind, LifecycleEvent
from notch_hook.hook_utils import Notification, Priority


class StopDispatcher(SimpleDispatcher):
    """Stop event dispatcher."""

    DISPATCHER_NAME = "stop_handler"
    EVENT_KIND = EventKind.STOP

    def handle(self, event: LifecycleEvent) -> Notification:
        return self.notification(
            "🎉", "Session finished",
            "Claude has finished all tasks",
            NotificationType.CELEBRATION,
            Priority.HIGH,
        )
