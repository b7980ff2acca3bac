"""
Notification composition and delivery to the notch display service.

Messages go over a Unix domain socket as one JSON object:
    {"title", "message", "type", "priority", "metadata": {str: str}}

Delivery is fire-and-forget. send_via_socket() reports failures as a
DeliveryResult value instead of raising; deliver() logs failed results and
carries on.
"""
import socket
from dataclasses import asdict, dataclass, field
from enum import IntEnum
from pathlib import Path

from notch_hook.config import HookConfig, Thresholds, fast_json_dumps
from notch_hook.hook_utils.logging import log_event

SOURCE = "claude-code"


class Priority(IntEnum):
    """Urgency levels understood by the display service."""
    LOW = 0
    NORMAL = 1
    HIGH = 2
    URGENT = 3


@dataclass
class Notification:
    """One message for the display service. Built fresh per event."""
    title: str
    message: str
    type: str
    priority: int
    metadata: dict[str, str] = field(default_factory=dict)

    def to_wire(self) -> bytes:
        """Serialize to the JSON wire form."""
        return fast_json_dumps(asdict(self))


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of one delivery attempt."""
    ok: bool
    error: str | None = None
    response: bytes | None = None


def baseline_metadata(config: HookConfig) -> dict[str, str]:
    """Metadata attached to every notification."""
    return {
        "source": SOURCE,
        "project": config.project_name,
        "project_path": str(config.project_path),
        "session_duration": f"{config.elapsed():.1f}",
    }


def compose_notification(
    config: HookConfig,
    title: str,
    message: str,
    notification_type: str,
    priority: int,
    extra: dict | None = None,
) -> Notification:
    """
    Build a Notification with baseline metadata merged in.

    Event-specific keys in ``extra`` win over baseline keys. Values are
    coerced to strings and priority is clamped to 0..3.
    """
    metadata = baseline_metadata(config)
    for key, value in (extra or {}).items():
        metadata[str(key)] = value if isinstance(value, str) else str(value)

    return Notification(
        title=title,
        message=message,
        type=notification_type,
        priority=int(max(Priority.LOW, min(int(priority), Priority.URGENT))),
        metadata=metadata,
    )


def send_via_socket(
    notification: Notification,
    socket_path: Path,
    timeout: float = Thresholds.SOCKET_TIMEOUT_S,
) -> DeliveryResult:
    """
    Write one notification to the display service socket.

    Connect and write failures are returned as ``ok=False``. After the
    write, one optional reply is read; a read failure or an empty reply
    still counts as delivered.
    """
    try:
        payload = notification.to_wire()
    except (TypeError, ValueError) as e:
        return DeliveryResult(ok=False, error=f"encode failed: {e}")

    try:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    except OSError as e:
        return DeliveryResult(ok=False, error=f"socket unavailable: {e}")

    with sock:
        try:
            sock.settimeout(timeout)
        except (TypeError, ValueError) as e:
            return DeliveryResult(ok=False, error=f"invalid timeout: {e}")

        try:
            sock.connect(str(socket_path))
        except OSError as e:
            return DeliveryResult(ok=False, error=f"connect failed: {e}")

        try:
            sock.sendall(payload)
        except OSError as e:
            return DeliveryResult(ok=False, error=f"write failed: {e}")

        try:
            response = sock.recv(Thresholds.SOCKET_READ_BYTES)
        except OSError:
            response = None

    return DeliveryResult(ok=True, response=response or None)


def deliver(config: HookConfig, notification: Notification) -> DeliveryResult:
    """Send a notification, logging (never raising) on failure."""
    result = send_via_socket(notification, config.socket_path, config.socket_timeout)
    if result.ok:
        log_event("notify", "delivered", {
            "title": notification.title,
            "type": notification.type,
            "priority": notification.priority,
        }, "debug")
    else:
        log_event("notify", "delivery_failed", {
            "error": result.error,
            "socket": str(config.socket_path),
            "msg": "Make sure the notch app is running",
        }, "warning")
    return result
