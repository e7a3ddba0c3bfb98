"""
Top-level page template discovery.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

OUTPUT_SUFFIX = ".html"


@dataclass(frozen=True)
class SourceTemplate:
    """
    A page template found directly under the source root.

    Attributes:
        path: Absolute path of the template file.
        name: File name, also the loader name used by the template engine.
        stem: File name without the template suffix.
    """
    path: Path
    name: str
    stem: str

    @property
    def output_name(self) -> str:
        return f"{self.stem}{OUTPUT_SUFFIX}"


def discover_templates(source_dir: Path, suffix: str) -> List[SourceTemplate]:
    """
    List page templates directly under source_dir, sorted by file name.

    Subdirectories (partials, assets) are never scanned.
    """
    pages: List[SourceTemplate] = []
    for path in sorted(Path(source_dir).iterdir(), key=lambda item: item.name):
        if not path.is_file() or not path.name.endswith(suffix):
            continue
        stem = path.name[: -len(suffix)]
        if not stem:
            continue
        pages.append(SourceTemplate(path=path, name=path.name, stem=stem))
    return pages
