"""
UserPromptSubmit Dispatcher - Surface confirmation prompts.

Only prompts that look like a confirmation (they mention allow/deny,
accept/reject or yes/no) are forwarded.
"""
from notch_hook.config import CONFIRMATION_KEYWORDS, NotificationType, Truncation
from notch_hook.dispatchers.base import SimpleDispatcher
from notch_hook.hook_sdk import EventKind, LifecycleEvent
from notch_hook.hook_utils import Notification, Priority, log_event, truncate


def prompt_text(event: LifecycleEvent) -> str | None:
    """Free text of the prompt: string tool_input, else the prompt field."""
    return event.tool_input.as_text() or event.get_str("prompt")


def is_confirmation(text: str) -> bool:
    """True if text contains any confirmation keyword (case-sensitive)."""
    return any(keyword in text for keyword in CONFIRMATION_KEYWORDS)


class UserPromptDispatcher(SimpleDispatcher):
    """UserPromptSubmit event dispatcher."""

    DISPATCHER_NAME = "user_prompt_handler"
    EVENT_KIND = EventKind.USER_PROMPT_SUBMIT

    def handle(self, event: LifecycleEvent) -> Notification | None:
        text = prompt_text(event)
        if not text or not is_confirmation(text):
            return None

        log_event(self.DISPATCHER_NAME, "confirmation_detected", {
            "prompt": truncate(text, Truncation.COMMAND),
        }, "debug")

        return self.notification(
            "📋", "Response needed",
            truncate(text, Truncation.PROMPT),
            NotificationType.CONFIRMATION,
            Priority.URGENT,
            {
                "prompt_type": "user_confirmation",
                "prompt_text": text,
            },
        )
