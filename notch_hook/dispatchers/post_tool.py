"""
PostToolUse Dispatcher - Confirm finished tool calls.

A tool error overrides every rule: any event carrying a non-empty error
produces an urgent error notification, whatever the tool. Completion
notices otherwise go out at reduced priority.
"""
from notch_hook.config import NotificationType, Truncation
from notch_hook.dispatchers.base import BaseDispatcher, ToolCategory
from notch_hook.hook_sdk import LifecycleEvent
from notch_hook.hook_utils import Notification, Priority, log_event, output_preview, truncate


class PostToolDispatcher(BaseDispatcher):
    """Dispatcher for PostToolUse events."""

    DISPATCHER_NAME = "post_tool_dispatcher"
    HOOK_EVENT_NAME = "PostToolUse"

    RULES = {
        ToolCategory.FILE_EDIT: "on_file_edit",
        ToolCategory.MULTI_EDIT: "on_multi_edit",
        ToolCategory.IDE_REPLACE: "on_ide_file",
        ToolCategory.IDE_CREATE: "on_ide_file",
        ToolCategory.IDE_NAVIGATE: "ignore",
        ToolCategory.IDE_RUN_CONFIG: "ignore",
        ToolCategory.IDE_TERMINAL: "ignore",
        ToolCategory.SHELL: "on_shell",
        ToolCategory.TASK: "on_task",
        ToolCategory.READ_ONLY: "ignore",
        ToolCategory.WEB: "ignore",
        ToolCategory.TODO: "ignore",
        ToolCategory.IDE_GENERIC: "ignore",
        ToolCategory.UNKNOWN: "ignore",
    }

    def dispatch(self, event: LifecycleEvent) -> Notification | None:
        if event.error:
            return self.on_error(event)
        return super().dispatch(event)

    def on_error(self, event: LifecycleEvent) -> Notification:
        log_event(self.DISPATCHER_NAME, "tool_error", {
            "tool": event.tool,
            "error": truncate(event.error, 200),
        }, "info")
        return self.notification(
            "❌", "Tool failed",
            f"{event.tool}: {truncate(event.error, Truncation.ERROR)}",
            NotificationType.ERROR,
            Priority.URGENT,
            {
                "event_type": "tool_error",
                "tool_name": event.tool,
                "error_message": event.error,
            },
        )

    def on_file_edit(self, event: LifecycleEvent) -> Notification | None:
        path = self.resolve_target(event.tool, event.tool_input)
        if path is None:
            return None
        return self.notification(
            "✅", "Edit complete", self.relative(path), NotificationType.SUCCESS, Priority.LOW
        )

    def on_multi_edit(self, event: LifecycleEvent) -> Notification | None:
        path = self.resolve_target(event.tool, event.tool_input)
        if path is None:
            return None
        edits = event.tool_input.get_list("edits") or []
        relative = self.relative(path)
        message = f"{relative} ({len(edits)} edits applied)" if edits else relative
        return self.notification(
            "✅", "Batch edit complete", message, NotificationType.SUCCESS, Priority.LOW
        )

    def on_ide_file(self, event: LifecycleEvent) -> Notification | None:
        path = self.resolve_target(event.tool, event.tool_input)
        if path is None:
            return None
        created = "create" in event.tool
        action = "file created" if created else "IDE edit complete"
        return self.notification(
            "✅", f"JetBrains {action}", self.relative(path), NotificationType.SUCCESS, Priority.LOW
        )

    def on_task(self, event: LifecycleEvent) -> Notification:
        return self.notification(
            "✨", "Agent finished", "AI task complete", NotificationType.SUCCESS, Priority.NORMAL
        )

    def on_shell(self, event: LifecycleEvent) -> Notification | None:
        output = event.response_text
        if not output:
            return None
        preview = output_preview(output, Truncation.OUTPUT_LINES, Truncation.OUTPUT)
        if not preview:
            return None
        return self.notification(
            "✅", "Command finished", preview, NotificationType.SUCCESS, Priority.LOW
        )
