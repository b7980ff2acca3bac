"""
File I/O utilities with graceful error handling.

Includes:
- Hashing (file_identity)
- Safe checks (safe_exists)
- Atomic writes (atomic_write_bytes, atomic_write_text)
"""
import hashlib
import os
import tempfile
from pathlib import Path

PathLike = str | Path


# =============================================================================
# Hashing Utilities
# =============================================================================

def file_identity(path: PathLike) -> str:
    """Stable artifact key for a file: hex SHA-256 of the absolute path string.

    Content independent, so re-previewing the same path reuses the same
    artifact names.
    """
    return hashlib.sha256(str(path).encode("utf-8")).hexdigest()


# =============================================================================
# Safe File Operations
# =============================================================================

def safe_exists(path: PathLike) -> bool:
    """Check if path exists safely, return False on error."""
    try:
        return os.path.exists(path)
    except (OSError, ValueError):
        return False


# =============================================================================
# Atomic Writes
# =============================================================================

def atomic_write_bytes(path: PathLike, data: bytes) -> None:
    """
    Write bytes atomically using temp file + rename.

    Readers never observe a half-written file; concurrent writers race and
    the last rename wins. Raises OSError on failure.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}_", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(temp_path, path)
    except BaseException:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def atomic_write_text(path: PathLike, text: str) -> None:
    """UTF-8 variant of atomic_write_bytes."""
    atomic_write_bytes(path, text.encode("utf-8"))
