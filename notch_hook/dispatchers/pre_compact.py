"""
PreCompact Dispatcher - Context compaction is about to run.
"""
from notch_hook.config import NotificationType
from notch_hook.dispatchers.base import SimpleDispatcher
from notch_hook.hook_sdk import EventKind, LifecycleEvent
from notch_hook.hook_utils import Notification, Priority


class PreCompactDispatcher(SimpleDispatcher):
    """PreCompact event dispatcher."""

    DISPATCHER_NAME = "pre_compact_handler"
    EVENT_KIND = EventKind.PRE_COMPACT

    def handle(self, event: LifecycleEvent) -> Notification:
        return self.notification(
            "🗜️", "Memory optimization",
            "Compacting context to save memory",
            NotificationType.INFO,
            Priority.LOW,
        )
