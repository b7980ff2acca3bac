"""
Notch Hook SDK - Typed abstractions over Claude Code hook events.

Provides:
- EventKind enum with PascalCase / snake_case normalization
- ToolInput wrapper with fallible accessors over loosely typed arguments
- LifecycleEvent dataclass
- decode_event() / read_stdin_event() for the raw stdin document

Usage:
    from notch_hook.hook_sdk import read_stdin_event, EventKind

    event = read_stdin_event()
    if event.kind is EventKind.PRE_TOOL_USE:
        path = event.tool_input.get_str("file_path")
"""
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import msgspec

from notch_hook.config import fast_json_loads
from notch_hook.errors import MalformedEvent


class EventKind(Enum):
    """Lifecycle events the hook understands."""
    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"
    STOP = "Stop"
    NOTIFICATION = "Notification"
    SESSION_START = "SessionStart"
    USER_PROMPT_SUBMIT = "UserPromptSubmit"
    PRE_COMPACT = "PreCompact"

    @classmethod
    def parse(cls, name: str) -> "EventKind | None":
        """Match a discriminator in either naming convention.

        "PreToolUse", "pre_tool_use" and "PRE_TOOL_USE" all map to
        PRE_TOOL_USE. Returns None for unknown names.
        """
        if not isinstance(name, str):
            return None
        return _KIND_ALIASES.get(_normalize(name))


def _normalize(name: str) -> str:
    return name.replace("_", "").replace("-", "").strip().lower()


_KIND_ALIASES = {_normalize(kind.value): kind for kind in EventKind}


# =============================================================================
# Tool arguments
# =============================================================================

@dataclass
class ToolInput:
    """Loosely typed tool arguments with fallible accessors.

    The wrapped value may be a mapping, a plain string, or absent. A missing
    or wrong-shaped field reads as None, never as an error.
    """
    raw: Any = None

    @property
    def is_mapping(self) -> bool:
        return isinstance(self.raw, dict)

    def get(self, key: str, default: Any = None) -> Any:
        if isinstance(self.raw, dict):
            return self.raw.get(key, default)
        return default

    def get_str(self, key: str) -> str | None:
        """Field value if it is a string, else None."""
        value = self.get(key)
        return value if isinstance(value, str) else None

    def get_list(self, key: str) -> list | None:
        """Field value if it is a list, else None."""
        value = self.get(key)
        return value if isinstance(value, list) else None

    def first_str(self, *keys: str) -> str | None:
        """First non-empty string among keys, in order."""
        for key in keys:
            value = self.get_str(key)
            if value:
                return value
        return None

    def as_text(self) -> str | None:
        """The arguments themselves when they are a plain string."""
        return self.raw if isinstance(self.raw, str) else None

    def __bool__(self) -> bool:
        return self.raw is not None


# =============================================================================
# Events
# =============================================================================

@dataclass
class LifecycleEvent:
    """One decoded hook event.

    ``kind`` is None when the discriminator is not recognized.
    """
    name: str
    kind: EventKind | None
    tool_name: str | None = None
    tool_input: ToolInput = field(default_factory=ToolInput)
    tool_response: Any = None
    error: str | None = None
    raw: dict = field(default_factory=dict)

    @property
    def tool(self) -> str:
        return self.tool_name or ""

    @property
    def session_id(self) -> str | None:
        value = self.raw.get("session_id")
        return value if isinstance(value, str) else None

    def get_str(self, key: str) -> str | None:
        """Top-level event field if it is a string."""
        value = self.raw.get(key)
        return value if isinstance(value, str) else None

    @property
    def response_text(self) -> str | None:
        """Tool output as text: the response itself, or its stdout/output/content."""
        response = self.tool_response
        if isinstance(response, str):
            return response
        if isinstance(response, dict):
            for key in ("stdout", "output", "content"):
                value = response.get(key)
                if isinstance(value, str) and value:
                    return value
        return None


def decode_event(data: str | bytes) -> LifecycleEvent:
    """
    Parse one hook event document.

    Raises:
        MalformedEvent: invalid JSON, not an object, or no string hook_event_name
    """
    try:
        doc = fast_json_loads(data)
    except (msgspec.DecodeError, UnicodeDecodeError) as e:
        raise MalformedEvent(f"invalid event JSON: {e}") from e

    if not isinstance(doc, dict):
        raise MalformedEvent(f"event must be a JSON object, got {type(doc).__name__}")

    name = doc.get("hook_event_name")
    if not isinstance(name, str) or not name:
        raise MalformedEvent("event is missing hook_event_name")

    tool_name = doc.get("tool_name")
    error = doc.get("error")

    response = None
    for key in ("tool_response", "tool_output", "tool_result"):
        if doc.get(key) is not None:
            response = doc[key]
            break

    return LifecycleEvent(
        name=name,
        kind=EventKind.parse(name),
        tool_name=tool_name if isinstance(tool_name, str) else None,
        tool_input=ToolInput(doc.get("tool_input")),
        tool_response=response,
        error=error if isinstance(error, str) else None,
        raw=doc,
    )


def read_stdin_event(stream=None) -> LifecycleEvent:
    """Read all of stdin (UTF-8) and decode it as one event."""
    stream = stream or sys.stdin.buffer
    return decode_event(stream.read())
