"""
Filesystem helpers shared across the build pipeline.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock

logger = logging.getLogger(__name__)


def ensure_directory(path: Path | str) -> Path:
    """
    Ensure a directory exists, returning the resolved Path.
    """
    resolved = Path(path).expanduser().resolve()
    resolved.mkdir(parents=True, exist_ok=True)
    return resolved


def _ensure_parent(target: Path) -> None:
    """Ensure the parent directory for target exists."""
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)


def is_relative_to(path: Path, base: Path) -> bool:
    """Return True if path is under base."""
    try:
        path.relative_to(base)
    except ValueError:
        return False
    return True


def remove_tree(path: Path | str) -> bool:
    """
    Remove a directory (or a stray file) at path.

    Returns False when nothing existed there.
    """
    target = Path(path).expanduser()
    if target.is_symlink() or target.is_file():
        target.unlink()
        return True
    if not target.exists():
        return False
    shutil.rmtree(target)
    logger.debug("Removed %s", target)
    return True


@contextmanager
def file_lock(path: Path | str):
    """Context manager for a filesystem lock file alongside the target."""
    target = Path(path).expanduser().resolve()
    lock_path = target.with_suffix(f"{target.suffix}.lock")
    _ensure_parent(lock_path)
    with FileLock(str(lock_path)):
        yield


def _atomic_write_text(target: Path, content: str, encoding: str) -> None:
    """Write text atomically by staging a temp file and renaming."""
    _ensure_parent(target)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, target)
        # mkstemp creates 0600 files; pages must be world-readable when served.
        os.chmod(target, 0o644)
    finally:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        except OSError:
            pass


def write_text_file(path: Path | str, content: str, encoding: str = "utf-8") -> Path:
    """
    Atomically write text to a file, creating parent directories as needed.

    Callers writing into a shared location hold ``file_lock`` themselves.
    """
    target = Path(path).expanduser().resolve()
    _atomic_write_text(target, content, encoding=encoding)
    return target
