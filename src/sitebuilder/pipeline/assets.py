"""
Verbatim copying of static assets and fixed root files.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)


def copy_assets(source_assets: Path, dest_assets: Path) -> int:
    """
    Recursively copy source_assets into dest_assets.

    Relative structure and file bytes are preserved. A missing source
    directory is not an error.

    Returns:
        Number of files copied.
    """
    if not source_assets.is_dir():
        logger.debug("No assets directory at %s; skipping", source_assets)
        return 0

    dest_assets.mkdir(parents=True, exist_ok=True)
    copied = 0
    for path in sorted(source_assets.rglob("*")):
        target = dest_assets / path.relative_to(source_assets)
        if path.is_dir():
            target.mkdir(parents=True, exist_ok=True)
        elif path.is_file():
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(path, target)
            copied += 1
    logger.info("Copied %d asset file(s) → %s", copied, dest_assets)
    return copied


def copy_fixed_files(source_dir: Path, dest_dir: Path, names: Iterable[str]) -> List[str]:
    """
    Copy each named root-level file that exists in source_dir.

    Returns:
        The names that were copied, in the order given.
    """
    copied: List[str] = []
    for name in names:
        source = source_dir / name
        if not source.is_file():
            logger.debug("Fixed file %s not present; skipping", name)
            continue
        shutil.copy2(source, dest_dir / name)
        copied.append(name)
    return copied
