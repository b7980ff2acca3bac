"""
Event router - decode, classify, deliver.

One event per process: stdin -> LifecycleEvent -> dispatcher for its kind
-> Notification -> socket. Unknown event kinds are logged and ignored.
"""
from notch_hook.config import HookConfig
from notch_hook.dispatchers.notification import NotificationDispatcher
from notch_hook.dispatchers.post_tool import PostToolDispatcher
from notch_hook.dispatchers.pre_compact import PreCompactDispatcher
from notch_hook.dispatchers.pre_tool import PreToolDispatcher
from notch_hook.dispatchers.session_start import SessionStartDispatcher
from notch_hook.dispatchers.stop import StopDispatcher
from notch_hook.dispatchers.user_prompt import UserPromptDispatcher
from notch_hook.hook_sdk import EventKind, LifecycleEvent, read_stdin_event
from notch_hook.hook_utils import Notification, deliver, log_event

DISPATCHERS = {
    EventKind.PRE_TOOL_USE: PreToolDispatcher,
    EventKind.POST_TOOL_USE: PostToolDispatcher,
    EventKind.STOP: StopDispatcher,
    EventKind.NOTIFICATION: NotificationDispatcher,
    EventKind.SESSION_START: SessionStartDispatcher,
    EventKind.USER_PROMPT_SUBMIT: UserPromptDispatcher,
    EventKind.PRE_COMPACT: PreCompactDispatcher,
}

_missing = [kind.name for kind in EventKind if kind not in DISPATCHERS]
if _missing:
    raise TypeError(f"no dispatcher for event kinds: {', '.join(_missing)}")


def classify_event(event: LifecycleEvent, config: HookConfig) -> Notification | None:
    """Build the notification for an event without sending it."""
    if event.kind is None:
        log_event("router", "unhandled_event", {"event": event.name}, "info")
        return None
    dispatcher = DISPATCHERS[event.kind](config)
    return dispatcher.dispatch(event)


def process_event(event: LifecycleEvent, config: HookConfig) -> Notification | None:
    """Classify an event and deliver the resulting notification, if any."""
    log_event("router", "event", {
        "event": event.name,
        "tool": event.tool or "unknown",
    }, "debug")

    notification = classify_event(event, config)
    if notification is not None:
        deliver(config, notification)
    return notification


def run_hook(config: HookConfig, stream=None) -> Notification | None:
    """Read one event from stdin (or stream) and process it.

    Raises:
        MalformedEvent: the event document could not be decoded
    """
    event = read_stdin_event(stream)
    return process_event(event, config)
