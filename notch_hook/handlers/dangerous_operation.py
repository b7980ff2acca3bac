"""Flag dangerous shell commands and edits to sensitive files.

Audit signal only: the pre-tool dispatcher logs positive results but does
not raise priority or block anything.
"""
from pathlib import Path

from notch_hook.config import DangerousOperations, Truncation
from notch_hook.hook_sdk import ToolInput
from notch_hook.hook_utils import relative_display, resolve_tool_path, truncate


def find_dangerous_keyword(command: str) -> str | None:
    """First dangerous keyword contained in command, or None."""
    for keyword in DangerousOperations.COMMAND_KEYWORDS:
        if keyword in command:
            return keyword
    return None


def find_sensitive_pattern(path: str) -> str | None:
    """First sensitive path pattern contained in path, or None."""
    for pattern in DangerousOperations.SENSITIVE_PATH_PATTERNS:
        if pattern in path:
            return pattern
    return None


def is_dangerous_operation(tool_name: str, tool_input: ToolInput, project_path: Path) -> bool:
    """True for risky Bash commands and Edit/Write on sensitive paths."""
    if tool_name == "Bash":
        command = tool_input.get_str("command")
        return bool(command and find_dangerous_keyword(command))

    if tool_name in ("Write", "Edit"):
        raw = tool_input.get_str("file_path")
        if raw:
            path = resolve_tool_path(raw, project_path)
            return find_sensitive_pattern(str(path)) is not None

    return False


def describe_operation(tool_name: str, tool_input: ToolInput, project_path: Path) -> str:
    """One-line audit description of the operation."""
    if tool_name == "Bash":
        command = tool_input.get_str("command")
        if command:
            return f"Run command: {truncate(command, Truncation.TARGET)}"
        return "Run Bash command"

    if tool_name in ("Write", "Edit"):
        raw = tool_input.get_str("file_path")
        if raw:
            path = resolve_tool_path(raw, project_path)
            return f"Modify sensitive file: {relative_display(path, project_path)}"
        return "Modify file"

    return f"Run operation: {tool_name}"
