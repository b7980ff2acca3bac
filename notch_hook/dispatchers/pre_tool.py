"""
PreToolUse Dispatcher - Announce tool calls before they run.

File-editing tools get a preview diff (see handlers/diff_preview.py) when
the edit's before/after text is available; the diff location travels in
the notification metadata so the display service can show it on demand.
If the preview cannot be built (unreadable file, unwritable cache) the plain
"about to modify" message is sent instead.
"""
from pathlib import Path

from notch_hook.config import NotificationType, Truncation
from notch_hook.dispatchers.base import BaseDispatcher, ToolCategory
from notch_hook.errors import PreviewError
from notch_hook.handlers.bash_classifier import classify_command
from notch_hook.handlers.dangerous_operation import describe_operation, is_dangerous_operation
from notch_hook.handlers.diff_preview import PreviewResult, generate_preview_diff
from notch_hook.handlers.jetbrains import describe_ide_tool
from notch_hook.hook_sdk import LifecycleEvent
from notch_hook.hook_utils import Notification, Priority, log_event, truncate

# tool name -> (old text argument, new text argument); None means not provided
TEXT_ARGUMENTS = {
    "Edit": ("old_string", "new_string"),
    "Write": (None, "content"),
    "mcp__jetbrains__replace_text_in_file": ("oldText", "newText"),
    "mcp__jetbrains__create_new_file": (None, "text"),
}

READ_ONLY_TARGETS = {
    "Read": ("file_path", "📖"),
    "Grep": ("pattern", "🔍"),
    "Glob": ("pattern", "📁"),
    "LS": ("path", "📋"),
}

NAVIGATE_LABELS = {
    "mcp__jetbrains__navigate_to_definition": ("🎯", "Go to definition"),
    "mcp__jetbrains__find_usages": ("🔗", "Find usages"),
    "mcp__jetbrains__search_everywhere": ("🌐", "Search everywhere"),
}

TASK_ICONS = {
    "statusline-setup": "⚙️",
    "output-style-setup": "🎨",
}


class PreToolDispatcher(BaseDispatcher):
    """Dispatcher for PreToolUse events."""

    DISPATCHER_NAME = "pre_tool_dispatcher"
    HOOK_EVENT_NAME = "PreToolUse"

    RULES = {
        ToolCategory.FILE_EDIT: "on_file_edit",
        ToolCategory.MULTI_EDIT: "on_multi_edit",
        ToolCategory.IDE_REPLACE: "on_ide_replace",
        ToolCategory.IDE_CREATE: "on_ide_create",
        ToolCategory.IDE_NAVIGATE: "on_ide_navigate",
        ToolCategory.IDE_RUN_CONFIG: "on_ide_run_config",
        ToolCategory.IDE_TERMINAL: "on_ide_terminal",
        ToolCategory.SHELL: "on_shell",
        ToolCategory.TASK: "on_task",
        ToolCategory.READ_ONLY: "on_read_only",
        ToolCategory.WEB: "on_web",
        ToolCategory.TODO: "on_todo",
        ToolCategory.IDE_GENERIC: "on_ide_generic",
        ToolCategory.UNKNOWN: "ignore",
    }

    def dispatch(self, event: LifecycleEvent) -> Notification | None:
        self.audit(event)
        return super().dispatch(event)

    def audit(self, event: LifecycleEvent) -> bool:
        """Log dangerous operations. Does not affect the notification."""
        project = self.config.project_path
        if not is_dangerous_operation(event.tool, event.tool_input, project):
            return False
        log_event("security", "dangerous_operation", {
            "tool": event.tool,
            "detail": describe_operation(event.tool, event.tool_input, project),
        }, "warning")
        return True

    # -------------------------------------------------------------------------
    # Preview helpers
    # -------------------------------------------------------------------------

    def extract_text(self, event: LifecycleEvent) -> tuple[str | None, str | None]:
        old_key, new_key = TEXT_ARGUMENTS.get(event.tool, (None, None))
        old_text = event.tool_input.get_str(old_key) if old_key else None
        new_text = event.tool_input.get_str(new_key) if new_key else None
        return old_text, new_text

    def try_preview(self, path: Path, old_text: str | None, new_text: str | None) -> PreviewResult | None:
        """Generate a preview, or None if the file or the artifacts could not be handled."""
        try:
            return generate_preview_diff(path, old_text, new_text, self.config.diff_dir)
        except PreviewError as e:
            log_event(self.DISPATCHER_NAME, "preview_failed", {"file": str(path), "error": str(e)}, "warning")
            return None

    def preview_notification(
        self,
        event: LifecycleEvent,
        path: Path,
        preview: PreviewResult,
        icon: str,
        label: str,
        notification_type: str,
    ) -> Notification:
        stats = preview.stats
        return self.notification(
            icon, label,
            f"{self.relative(path)} (expected +{stats.added} -{stats.removed})",
            notification_type,
            Priority.HIGH,
            {
                "tool_name": event.tool,
                "event_type": self.HOOK_EVENT_NAME,
                "file_path": str(path),
                "diff_path": str(preview.diff_path),
                "stats_path": str(preview.stats_path),
                "is_preview": "true",
            },
        )

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    def on_file_edit(self, event: LifecycleEvent) -> Notification | None:
        path = self.resolve_target(event.tool, event.tool_input)
        if path is None:
            return None

        old_text, new_text = self.extract_text(event)
        # Edit needs both halves; Write only the new content
        can_preview = new_text is not None and (event.tool == "Write" or old_text is not None)
        if can_preview:
            preview = self.try_preview(path, old_text, new_text)
            if preview is not None:
                return self.preview_notification(
                    event, path, preview, "⏸️", "About to modify", NotificationType.TOOL_USE
                )

        return self.notification(
            "✏️", "About to modify", self.relative(path), NotificationType.TOOL_USE, Priority.HIGH
        )

    def on_multi_edit(self, event: LifecycleEvent) -> Notification | None:
        path = self.resolve_target(event.tool, event.tool_input)
        if path is None:
            return None

        edits = event.tool_input.get_list("edits") or []
        relative = self.relative(path)
        message = f"{relative} ({len(edits)} edits)" if edits else f"{relative} (batch edit)"
        return self.notification("📝", "Batch edit", message, NotificationType.TOOL_USE, Priority.HIGH)

    def on_ide_replace(self, event: LifecycleEvent) -> Notification | None:
        path = self.resolve_target(event.tool, event.tool_input)
        if path is None:
            return None

        old_text, new_text = self.extract_text(event)
        if old_text is not None and new_text is not None:
            preview = self.try_preview(path, old_text, new_text)
            if preview is not None:
                return self.preview_notification(
                    event, path, preview, "✏️", "JetBrains IDE edit", NotificationType.SYNC
                )

        return self.notification(
            "✏️", "JetBrains IDE edit", self.relative(path), NotificationType.SYNC, Priority.HIGH
        )

    def on_ide_create(self, event: LifecycleEvent) -> Notification | None:
        path = self.resolve_target(event.tool, event.tool_input)
        if path is None:
            return None
        return self.notification(
            "🆕", "JetBrains create file", self.relative(path), NotificationType.SYNC, Priority.HIGH
        )

    def on_ide_navigate(self, event: LifecycleEvent) -> Notification | None:
        if not event.tool_input:
            return None
        target = event.tool_input.first_str("symbol", "query") or "unknown target"
        icon, action = NAVIGATE_LABELS.get(event.tool, ("🔍", "Search"))
        return self.notification(
            icon, f"JetBrains {action}",
            truncate(target, Truncation.IDE_DETAIL),
            NotificationType.SYNC,
            Priority.NORMAL,
        )

    def on_ide_run_config(self, event: LifecycleEvent) -> Notification | None:
        if not event.tool_input:
            return None
        config_name = event.tool_input.get_str("configuration") or "default configuration"
        icon, action = ("🐞", "debug") if "debug" in event.tool else ("▶️", "run")
        return self.notification(
            icon, f"JetBrains {action}", config_name, NotificationType.SYNC, Priority.HIGH
        )

    def on_ide_terminal(self, event: LifecycleEvent) -> Notification | None:
        command = event.tool_input.get_str("command")
        if command is None:
            return None
        return self.notification(
            "💻", "JetBrains terminal",
            truncate(command, Truncation.COMMAND),
            NotificationType.SYNC,
            Priority.HIGH,
        )

    def on_shell(self, event: LifecycleEvent) -> Notification | None:
        command = event.tool_input.get_str("command")
        if command is None:
            return None

        command_class = classify_command(command)
        if not command_class.notify:
            log_event(self.DISPATCHER_NAME, "command_suppressed", {
                "category": command_class.category,
                "command": truncate(command, Truncation.COMMAND),
            }, "debug")
            return None

        return self.notification(
            command_class.icon, "Run command",
            f"{truncate(command, Truncation.COMMAND)}...",
            NotificationType.TOOL_USE,
            command_class.priority,
            {"command_category": command_class.category},
        )

    def on_task(self, event: LifecycleEvent) -> Notification | None:
        if not event.tool_input:
            return None
        subagent_type = event.tool_input.get_str("subagent_type") or "general-purpose"
        description = event.tool_input.get_str("description") or "AI task in progress"
        icon = TASK_ICONS.get(subagent_type, "🤖")
        return self.notification(
            icon, "Agent started",
            f"{description} ({subagent_type})",
            NotificationType.AI,
            Priority.HIGH,
        )

    def on_read_only(self, event: LifecycleEvent) -> Notification | None:
        key, icon = READ_ONLY_TARGETS[event.tool]
        target = event.tool_input.get_str(key)
        if target is None:
            return None
        return self.notification(
            icon, event.tool,
            truncate(target, Truncation.TARGET),
            NotificationType.INFO,
            Priority.LOW,
        )

    def on_web(self, event: LifecycleEvent) -> Notification | None:
        if not event.tool_input:
            return None
        url_or_query = event.tool_input.first_str("url", "query") or ""
        icon = "🔎" if event.tool == "WebSearch" else "🌐"
        return self.notification(
            icon, "Network access",
            truncate(url_or_query, Truncation.TARGET),
            NotificationType.DOWNLOAD,
            Priority.NORMAL,
        )

    def on_todo(self, event: LifecycleEvent) -> Notification | None:
        todos = event.tool_input.get_list("todos")
        if todos is None:
            return None
        completed = sum(
            1 for todo in todos
            if isinstance(todo, dict) and todo.get("status") == "completed"
        )
        return self.notification(
            "📋", "Tasks updated",
            f"Progress: {completed}/{len(todos)} completed",
            NotificationType.REMINDER,
            Priority.NORMAL,
        )

    def on_ide_generic(self, event: LifecycleEvent) -> Notification | None:
        action = describe_ide_tool(event.tool, event.tool_input)
        if not action.should_notify:
            return None
        return self.notification(
            action.icon, f"JetBrains {action.label}",
            action.message,
            NotificationType.SYNC,
            action.priority,
        )
