"""
Hook utilities package - shared helpers for the notch hook.

Usage:
    from notch_hook.hook_utils import log_event, graceful_main, truncate
    # or
    from notch_hook.hook_utils.notify import deliver
"""
from .logging import (
    configure_logging,
    graceful_main,
    log_event,
)

from .io import (
    atomic_write_bytes,
    atomic_write_text,
    file_identity,
    safe_exists,
)

from .paths import (
    relative_display,
    resolve_tool_path,
)

from .text import (
    first_lines,
    output_preview,
    truncate,
)

from .notify import (
    DeliveryResult,
    Notification,
    Priority,
    compose_notification,
    deliver,
    send_via_socket,
)

__all__ = [
    # Logging
    "configure_logging",
    "graceful_main",
    "log_event",
    # I/O
    "atomic_write_bytes",
    "atomic_write_text",
    "file_identity",
    "safe_exists",
    # Paths
    "relative_display",
    "resolve_tool_path",
    # Text
    "first_lines",
    "output_preview",
    "truncate",
    # Notify
    "DeliveryResult",
    "Notification",
    "Priority",
    "compose_notification",
    "deliver",
    "send_via_socket",
]
