"""
Diff preview - Compute the effect of a file edit before it is applied.

Builds the hypothetical post-edit content, diffs it line by line against
the current file, and writes two artifacts named by the path's
FileIdentity into the project's diff cache:

    <sha256>.preview.diff        unified diff, 3 lines of context
    <sha256>.preview.stats.json  {"added", "removed", "file", "preview"}

Re-previewing a path overwrites its artifacts. Nothing here deletes them.

Used by dispatchers/pre_tool.py and the `diff` CLI mode.
"""
import difflib
from dataclasses import asdict, dataclass
from pathlib import Path

from notch_hook.config import Paths, Thresholds, fast_json_dumps
from notch_hook.errors import PreviewError
from notch_hook.hook_utils import (
    atomic_write_bytes,
    atomic_write_text,
    file_identity,
    log_event,
    safe_exists,
)


@dataclass(frozen=True)
class DiffStats:
    """Line counts for one preview."""
    added: int
    removed: int
    file: str
    preview: bool = True


@dataclass(frozen=True)
class PreviewResult:
    """Artifacts and stats produced by generate_preview_diff()."""
    diff_path: Path
    stats_path: Path
    stats: DiffStats
    modified_content: str


def synthesize_modified(original: str, old_text: str | None, new_text: str | None) -> str:
    """
    Hypothetical file content after the edit.

    - old and new: replace the first occurrence of old with new
    - new only: full-file write, new verbatim
    - neither: unchanged
    """
    if old_text is not None and new_text is not None:
        result = original.replace(old_text, new_text, 1)
        if result == original:
            log_event("diff_preview", "replacement_missed", {
                "looking_for": old_text[:80],
                "first_line": original.splitlines()[0][:80] if original else "",
            }, "debug")
        return result
    if new_text is not None:
        return new_text
    return original


def read_baseline(file_path: Path) -> str:
    """
    Current content of file_path; "" when the file does not exist yet.

    Raises:
        PreviewError: the file exists but is not readable UTF-8 text
    """
    if not safe_exists(file_path):
        return ""
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PreviewError(f"cannot read {file_path}: {e}") from e


def count_changes(original: str, modified: str) -> tuple[int, int]:
    """(inserted, deleted) line counts; equal lines count for neither."""
    added = removed = 0
    matcher = difflib.SequenceMatcher(
        None, original.splitlines(keepends=True), modified.splitlines(keepends=True), autojunk=False
    )
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag in ("replace", "delete"):
            removed += i2 - i1
        if tag in ("replace", "insert"):
            added += j2 - j1
    return added, removed


def unified_diff(original: str, modified: str, label: str) -> str:
    """Unified diff text with ``--- label`` / ``+++ label`` headers."""
    lines = difflib.unified_diff(
        original.splitlines(keepends=True),
        modified.splitlines(keepends=True),
        fromfile=label,
        tofile=label,
        n=Thresholds.DIFF_CONTEXT_LINES,
    )
    out = []
    for line in lines:
        out.append(line if line.endswith("\n") else line + "\n\\ No newline at end of file\n")
    return "".join(out)


def artifact_paths(file_path: Path, diff_dir: Path) -> tuple[Path, Path]:
    """(diff, stats) artifact paths for file_path inside diff_dir."""
    file_id = file_identity(file_path)
    return (
        Path(diff_dir) / f"{file_id}{Paths.DIFF_SUFFIX}",
        Path(diff_dir) / f"{file_id}{Paths.STATS_SUFFIX}",
    )


def generate_preview_diff(
    file_path: Path,
    old_text: str | None,
    new_text: str | None,
    diff_dir: Path,
) -> PreviewResult:
    """
    Compute and persist a preview diff for an edit to file_path.

    A file that does not exist yet is treated as empty.

    Raises:
        PreviewError: the existing file could not be read, or the artifacts
            could not be written
    """
    file_path = Path(file_path)
    original = read_baseline(file_path)
    modified = synthesize_modified(original, old_text, new_text)

    added, removed = count_changes(original, modified)
    stats = DiffStats(added=added, removed=removed, file=str(file_path))

    diff_path, stats_path = artifact_paths(file_path, diff_dir)
    try:
        atomic_write_text(diff_path, unified_diff(original, modified, str(file_path)))
        atomic_write_bytes(stats_path, fast_json_dumps(asdict(stats)))
    except OSError as e:
        raise PreviewError(f"cannot write preview for {file_path}: {e}") from e

    log_event("diff_preview", "generated", {
        "file": str(file_path),
        "added": added,
        "removed": removed,
        "diff_path": str(diff_path),
    }, "debug")

    return PreviewResult(
        diff_path=diff_path,
        stats_path=stats_path,
        stats=stats,
        modified_content=modified,
    )
