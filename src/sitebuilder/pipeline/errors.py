"""
Errors raised by the build pipeline.
"""

from __future__ import annotations

from pathlib import Path


class SiteBuildError(RuntimeError):
    """Base class for failures that abort a build run."""


class SourceMissing(SiteBuildError):
    """Raised when the source root does not exist or is not a directory."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Source directory not found: {path}")


class RenderFailure(SiteBuildError):
    """Raised when a page template cannot be rendered."""

    def __init__(self, source: Path, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to render {source}: {reason}")


class WriteFailure(SiteBuildError):
    """Raised when the destination cannot be created or written."""

    def __init__(self, path: Path, reason: object) -> None:
        self.path = path
        self.reason = str(reason)
        super().__init__(f"Unable to write {path}: {reason}")
