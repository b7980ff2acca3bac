"""
Path utilities - Resolve tool-reported paths against the project root.

Agents sometimes send a project-relative path with a leading "/" (e.g.
"/README.md"). A rooted path is trusted only if it exists on disk;
otherwise the leading slashes are stripped and it is joined to the project
root.
"""
from pathlib import Path

from notch_hook.hook_utils.io import safe_exists
from notch_hook.hook_utils.logging import log_event


def resolve_tool_path(raw: str, project_path: Path) -> Path:
    """Resolve a tool's raw path argument to an absolute path.

    Args:
        raw: Path string exactly as the tool reported it
        project_path: Project root

    Returns:
        Absolute path (not symlink-resolved)
    """
    project_path = Path(project_path)
    if raw.startswith("/"):
        candidate = Path(raw)
        if safe_exists(candidate):
            log_event("paths", "absolute_path", {"path": raw}, "debug")
            return candidate
        resolved = project_path / raw.lstrip("/")
        log_event("paths", "false_absolute_path", {"raw": raw, "resolved": str(resolved)}, "debug")
        return resolved

    resolved = project_path / raw
    log_event("paths", "relative_path", {"raw": raw, "resolved": str(resolved)}, "debug")
    return resolved


def relative_display(path: Path, project_path: Path) -> str:
    """Project-relative display string, or the absolute path when outside the root."""
    try:
        return str(Path(path).relative_to(project_path))
    except ValueError:
        return str(path)
