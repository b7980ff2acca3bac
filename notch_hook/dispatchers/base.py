"""
Base classes for event dispatchers.

Tool events are routed in two steps:
1. classify_tool() maps the tool name to a ToolCategory (exact name first,
   then the mcp__jetbrains__ prefix, else UNKNOWN)
2. the dispatcher's RULES table maps every ToolCategory to a rule method

RULES must cover every ToolCategory member; a dispatcher class with a gap
fails at import time instead of silently dropping events.

Non-tool events (Stop, SessionStart, ...) use SimpleDispatcher, which runs
one handle() for its event kind.

Subclasses override:
- DISPATCHER_NAME: Name for logging
- HOOK_EVENT_NAME: "PreToolUse" or "PostToolUse"
- RULES: ToolCategory -> method name
"""
import time
from abc import ABC, abstractmethod
from enum import Enum, auto
from pathlib import Path

from notch_hook.config import HookConfig
from notch_hook.handlers.jetbrains import PREFIX as JETBRAINS_PREFIX
from notch_hook.hook_sdk import EventKind, LifecycleEvent, ToolInput
from notch_hook.hook_utils import (
    Notification,
    compose_notification,
    log_event,
    relative_display,
    resolve_tool_path,
)


class ToolCategory(Enum):
    """Closed set of tool shapes the dispatchers know how to describe."""
    FILE_EDIT = auto()
    MULTI_EDIT = auto()
    IDE_REPLACE = auto()
    IDE_CREATE = auto()
    IDE_NAVIGATE = auto()
    IDE_RUN_CONFIG = auto()
    IDE_TERMINAL = auto()
    SHELL = auto()
    TASK = auto()
    READ_ONLY = auto()
    WEB = auto()
    TODO = auto()
    IDE_GENERIC = auto()
    UNKNOWN = auto()


TOOL_CATEGORIES = {
    "Edit": ToolCategory.FILE_EDIT,
    "Write": ToolCategory.FILE_EDIT,
    "MultiEdit": ToolCategory.MULTI_EDIT,
    "mcp__jetbrains__replace_text_in_file": ToolCategory.IDE_REPLACE,
    "mcp__jetbrains__create_new_file": ToolCategory.IDE_CREATE,
    "mcp__jetbrains__navigate_to_definition": ToolCategory.IDE_NAVIGATE,
    "mcp__jetbrains__find_usages": ToolCategory.IDE_NAVIGATE,
    "mcp__jetbrains__search_everywhere": ToolCategory.IDE_NAVIGATE,
    "mcp__jetbrains__run_configuration": ToolCategory.IDE_RUN_CONFIG,
    "mcp__jetbrains__debug_configuration": ToolCategory.IDE_RUN_CONFIG,
    "mcp__jetbrains__execute_terminal_command": ToolCategory.IDE_TERMINAL,
    "Bash": ToolCategory.SHELL,
    "Task": ToolCategory.TASK,
    "Read": ToolCategory.READ_ONLY,
    "Grep": ToolCategory.READ_ONLY,
    "Glob": ToolCategory.READ_ONLY,
    "LS": ToolCategory.READ_ONLY,
    "WebFetch": ToolCategory.WEB,
    "WebSearch": ToolCategory.WEB,
    "TodoWrite": ToolCategory.TODO,
}

# Argument holding the target path, per tool
PATH_ARGUMENTS = {
    "Edit": "file_path",
    "Write": "file_path",
    "MultiEdit": "file_path",
    "mcp__jetbrains__replace_text_in_file": "pathInProject",
    "mcp__jetbrains__create_new_file": "pathInProject",
}


def classify_tool(tool_name: str) -> ToolCategory:
    """Map a tool name to its category."""
    category = TOOL_CATEGORIES.get(tool_name)
    if category is not None:
        return category
    if tool_name.startswith(JETBRAINS_PREFIX):
        return ToolCategory.IDE_GENERIC
    return ToolCategory.UNKNOWN


class NotifyingMixin:
    """Shared notification helpers. Requires ``self.config``."""

    config: HookConfig

    def title(self, icon: str, label: str) -> str:
        """Title in the "[project] icon label" form."""
        return f"[{self.config.project_name}] {icon} {label}"

    def notification(
        self,
        icon: str,
        label: str,
        message: str,
        notification_type: str,
        priority: int,
        extra: dict | None = None,
    ) -> Notification:
        return compose_notification(
            self.config,
            self.title(icon, label),
            message,
            notification_type,
            priority,
            extra,
        )


class BaseDispatcher(NotifyingMixin, ABC):
    """Abstract base class for tool event dispatchers."""

    DISPATCHER_NAME: str = "base_dispatcher"
    HOOK_EVENT_NAME: str = "Unknown"
    RULES: dict[ToolCategory, str] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if not cls.RULES:
            return
        missing = [c.name for c in ToolCategory if c not in cls.RULES]
        if missing:
            raise TypeError(f"{cls.__name__}.RULES missing categories: {', '.join(missing)}")
        not_callable = [m for m in cls.RULES.values() if not callable(getattr(cls, m, None))]
        if not_callable:
            raise TypeError(f"{cls.__name__}.RULES names unknown methods: {', '.join(not_callable)}")

    def __init__(self, config: HookConfig):
        self.config = config

    def resolve_target(self, tool_name: str, tool_input: ToolInput) -> Path | None:
        """Absolute target path for a file tool, or None if absent."""
        key = PATH_ARGUMENTS.get(tool_name)
        if key is None:
            return None
        raw = tool_input.get_str(key)
        if not raw:
            return None
        return resolve_tool_path(raw, self.config.project_path)

    def relative(self, path: Path) -> str:
        return relative_display(path, self.config.project_path)

    def ignore(self, event: LifecycleEvent) -> None:
        """Rule for categories this event kind does not notify about."""
        return None

    def dispatch(self, event: LifecycleEvent) -> Notification | None:
        """Route the event to the rule for its tool category."""
        category = classify_tool(event.tool)
        rule = getattr(self, self.RULES[category])

        start_time = time.perf_counter()
        result = rule(event)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        log_event(self.DISPATCHER_NAME, "rule_timing", {
            "tool": event.tool,
            "category": category.name,
            "rule": self.RULES[category],
            "elapsed_ms": round(elapsed_ms, 2),
            "notified": result is not None,
        }, "debug")
        return result


class SimpleDispatcher(NotifyingMixin, ABC):
    """Base class for non-tool event dispatchers (Stop, SessionStart, ...).

    Subclasses override:
    - DISPATCHER_NAME: Name for logging
    - EVENT_KIND: EventKind handled
    - handle(): Build the notification, or None

    Example:
        class StopDispatcher(SimpleDispatcher):
            DISPATCHER_NAME = "stop_handler"
            EVENT_KIND = EventKind.STOP

            def handle(self, event):
                return self.notification("🎉", "Session finished", ...)
    """

    DISPATCHER_NAME: str = "simple_dispatcher"
    EVENT_KIND: EventKind | None = None

    def __init__(self, config: HookConfig):
        self.config = config

    @abstractmethod
    def handle(self, event: LifecycleEvent) -> Notification | None:
        """Build the notification for this event, or None to stay silent."""

    def validate_event(self, event: LifecycleEvent) -> bool:
        if self.EVENT_KIND is None:
            return True
        return event.kind is self.EVENT_KIND

    def dispatch(self, event: LifecycleEvent) -> Notification | None:
        if not self.validate_event(event):
            return None
        log_event(self.DISPATCHER_NAME, "dispatch", {"event": event.name}, "debug")
        return self.handle(event)
