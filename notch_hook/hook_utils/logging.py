"""
Logging and graceful degradation utilities.

Uses loguru for diagnostics on stderr plus a structured JSON log file
with automatic rotation.
"""
import os
import sys
from functools import wraps
from pathlib import Path
from typing import Callable

from loguru import logger

from notch_hook.config import Paths

LOG_LEVEL = os.environ.get("NOTCH_HOOK_LOG_LEVEL", "WARNING").upper()

STDERR_FORMAT = "[{extra[hook]}] <level>{level}</level> {message} {extra}"

# Every record carries a hook name so the stderr format never misses a key
logger.configure(extra={"hook": "notch_hook"})

_configured = False


def configure_logging(data_dir: Path = None, level: str = None) -> None:
    """
    Install the stderr sink and the JSON-lines file sink.

    Called once from the CLI entry point. Safe to call again; later calls
    are ignored.

    Args:
        data_dir: Directory for the JSON log file (default: Paths.DATA_DIR)
        level: Minimum stderr level (default: NOTCH_HOOK_LOG_LEVEL or WARNING)
    """
    global _configured
    if _configured:
        return
    _configured = True

    logger.remove()
    logger.add(
        sys.stderr,
        format=STDERR_FORMAT,
        level=level or LOG_LEVEL,
        colorize=False,
        catch=True,
    )

    data_dir = Path(data_dir or Paths.DATA_DIR)
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        # Diagnostics still reach stderr
        return
    logger.add(
        data_dir / Paths.LOG_FILE_NAME,
        format="{message}",
        serialize=True,  # JSON output
        rotation="10 MB",
        retention=3,
        compression="gz",
        level="DEBUG",
        catch=True,  # Never raise
    )


def log_event(hook_name: str, event_type: str, data: dict = None, level: str = "info"):
    """
    Log structured event using loguru.

    Args:
        hook_name: Component name (e.g., "pre_tool_dispatcher")
        event_type: Event type (e.g., "delivery_failed", "error")
        data: Additional context data
        level: Log level (debug, info, warning, error)
    """
    try:
        log_func = getattr(logger, level, logger.info)
        log_func(event_type, hook=hook_name, **(data or {}))
    except Exception:
        pass  # Never raise


def graceful_main(hook_name: str, fatal: tuple = ()):
    """
    Decorator for CLI entry points.

    Exceptions listed in ``fatal`` are logged and exit with status 1.
    Anything else is logged and exits 0 so a broken notification never
    blocks the agent.

    Usage:
        @graceful_main("hook", fatal=(MalformedEvent,))
        def main():
            ...
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except fatal as e:
                log_event(hook_name, "fatal", {"type": type(e).__name__, "msg": str(e)}, "error")
                sys.exit(1)
            except Exception as e:
                log_event(hook_name, "error", {"type": type(e).__name__, "msg": str(e)}, "error")
                sys.exit(0)
        return wrapper
    return decorator
