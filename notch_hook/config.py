"""
Centralized configuration for the notch hook.

All configurable constants in one place for easy tuning.
Individual modules import from here for consistency.

Categories:
- Paths: Data directories, diff cache, socket location
- Truncation: Character budgets for displayed text
- Thresholds: Priority caps and I/O limits
- Patterns: Shell command categories, dangerous operation keywords
- HookConfig: Per-process context passed to every component
"""
import math
import os
import time
from dataclasses import dataclass, field
from pathlib import Path

import msgspec

from notch_hook.errors import SetupError

# =============================================================================
# Fast JSON (msgspec)
# =============================================================================

_json_decoder = msgspec.json.Decoder()
_json_encoder = msgspec.json.Encoder()


def fast_json_loads(data: str | bytes):
    """Decode JSON from str or bytes using msgspec."""
    return _json_decoder.decode(data)


def fast_json_dumps(obj) -> bytes:
    """Encode obj to compact JSON bytes using msgspec."""
    return _json_encoder.encode(obj)


# =============================================================================
# Paths
# =============================================================================

class Paths:
    """Default locations, overridable via environment."""
    DATA_DIR = Path(os.environ.get("CLAUDE_DATA_DIR", Path.home() / ".claude" / "data"))
    LOG_FILE_NAME = "notch-hook-events.jsonl"

    APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "NotchNoti"
    SOCKET_PATH = (
        Path.home() / "Library" / "Containers" / "com.qingchang.notchnoti" / "Data" / ".notch.sock"
    )

    DIFF_SUFFIX = ".preview.diff"
    STATS_SUFFIX = ".preview.stats.json"


# =============================================================================
# Truncation budgets (characters, not bytes)
# =============================================================================

class Truncation:
    """Character budgets for text shown in notifications."""
    COMMAND = 80
    IDE_DETAIL = 80
    TARGET = 100
    ERROR = 100
    OUTPUT = 100
    PROMPT = 200
    OUTPUT_LINES = 2


# =============================================================================
# Thresholds and Limits
# =============================================================================

class Thresholds:
    """Priority caps and I/O limits."""
    MAX_COMMAND_PRIORITY = 2
    DIFF_CONTEXT_LINES = 3
    SOCKET_TIMEOUT_S = 2.0
    SOCKET_READ_BYTES = 4096


class NotificationType:
    """Category tags understood by the display service."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    TOOL_USE = "tool_use"
    CELEBRATION = "celebration"
    REMINDER = "reminder"
    DOWNLOAD = "download"
    AI = "ai"
    SYNC = "sync"
    CONFIRMATION = "confirmation"


# =============================================================================
# Shell Command Categories
# =============================================================================

class BashCategories:
    """Prefix tables for shell command classification.

    Order matters: the first matching row wins. A priority of None marks
    commands that are never notified.
    """
    # (category, prefixes, priority, icon)
    RULES = [
        ("vcs", ("git ",), 2, "🔀"),
        ("package", ("npm ", "yarn ", "pnpm "), 2, "📦"),
        ("destructive", ("rm ", "mv "), 3, "⚠️"),
        ("container", ("docker ", "kubectl "), 2, "🐳"),
        ("build", ("make ", "cargo ", "go "), 1, "🔨"),
        ("test", ("pytest", "jest", "test"), 1, "🧪"),
        ("noise", ("echo", "ls", "pwd", "date", "curl localhost:9876"), None, ""),
    ]
    DEFAULT = ("other", 1, "💻")


# =============================================================================
# Dangerous Operations
# =============================================================================

class DangerousOperations:
    """Substring keywords for the audit-only dangerous operation check."""
    COMMAND_KEYWORDS = [
        "rm -rf",
        "sudo",
        "chmod 777",
        "mkfs",
        "> /dev/",
        "dd if=",
        "curl | bash",
        "wget | sh",
        ":(){ :|:& };:",
    ]

    SENSITIVE_PATH_PATTERNS = [
        ".ssh/",
        ".aws/",
        "package.json",
        "Cargo.toml",
        ".env",
        "credentials",
    ]


# =============================================================================
# Prompt Keywords
# =============================================================================

CONFIRMATION_KEYWORDS = ("allow", "deny", "accept", "reject", "yes", "no")


# =============================================================================
# Per-process context
# =============================================================================

def _env_float(name: str, default: float) -> float:
    """Positive finite float from the environment, else default."""
    try:
        value = float(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default
    if not math.isfinite(value) or value <= 0:
        return default
    return value


@dataclass
class HookConfig:
    """Read-only context established once at startup.

    Passed explicitly to the dispatchers, the preview generator and the
    transport instead of being looked up globally.
    """
    project_path: Path
    project_name: str
    diff_dir: Path
    socket_path: Path
    socket_timeout: float = Thresholds.SOCKET_TIMEOUT_S
    data_dir: Path = Paths.DATA_DIR
    started_at: float = field(default_factory=time.monotonic)

    @classmethod
    def for_project(cls, project_path: Path, **overrides) -> "HookConfig":
        """Build a config for project_path with default cache and socket paths."""
        project_path = Path(project_path)
        project_name = project_path.name or "unknown"
        overrides.setdefault("diff_dir", Paths.APP_SUPPORT_DIR / "diffs" / project_name)
        overrides.setdefault("socket_path", Paths.SOCKET_PATH)
        return cls(project_path=project_path, project_name=project_name, **overrides)

    @classmethod
    def from_env(cls) -> "HookConfig":
        """Build the config from CLAUDE_PROJECT_DIR and NOTCH_* variables."""
        from notch_hook.hook_utils.logging import log_event

        project_dir = os.environ.get("CLAUDE_PROJECT_DIR")
        if project_dir:
            project_path = Path(project_dir)
        else:
            log_event("config", "project_dir_missing", {
                "msg": "CLAUDE_PROJECT_DIR not set, falling back to current dir"
            }, "warning")
            project_path = Path.cwd()

        overrides = {
            "socket_timeout": _env_float("NOTCH_SOCKET_TIMEOUT", Thresholds.SOCKET_TIMEOUT_S),
            "data_dir": Paths.DATA_DIR,
        }
        if os.environ.get("NOTCH_DIFF_DIR"):
            overrides["diff_dir"] = Path(os.environ["NOTCH_DIFF_DIR"])
        if os.environ.get("NOTCH_SOCKET_PATH"):
            overrides["socket_path"] = Path(os.environ["NOTCH_SOCKET_PATH"])

        config = cls.for_project(project_path, **overrides)
        log_event("config", "loaded", {
            "project_path": str(config.project_path),
            "diff_dir": str(config.diff_dir),
            "socket_path": str(config.socket_path),
        }, "debug")
        return config

    def ensure_dirs(self) -> None:
        """Create the diff cache directory. Raises SetupError on failure."""
        try:
            self.diff_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SetupError(f"cannot create diff directory {self.diff_dir}: {e}") from e

    def elapsed(self) -> float:
        """Seconds since this config was created."""
        return time.monotonic() - self.started_at
