"""
Site build pipeline: render pages, copy static files, publish the result.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from ..config import SiteConfig
from ..render import PartialCatalog, SourceTemplate, TemplateEngine, discover_templates
from ..util import ensure_directory, file_lock, is_relative_to, remove_tree, write_text_file
from .assets import copy_assets, copy_fixed_files
from .errors import RenderFailure, SourceMissing, WriteFailure

logger = logging.getLogger(__name__)


@dataclass
class RenderedPage:
    source: Path
    output: Path


@dataclass
class BuildReport:
    """
    Stores what a build run produced.

    Attributes:
        source: The source root that was rendered.
        destination: The destination root that now holds the site.
        pages: One entry per rendered page, in processing order.
        assets_copied: Number of files copied from the assets directory.
        fixed_files: Names of the fixed root files that were copied.
    """
    source: Path
    destination: Path
    pages: List[RenderedPage] = field(default_factory=list)
    assets_copied: int = 0
    fixed_files: List[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Source", str(self.source))
        yield ("Destination", str(self.destination))
        yield ("Pages rendered", str(self.page_count))
        yield ("Assets copied", str(self.assets_copied))
        yield ("Fixed files", ", ".join(self.fixed_files) if self.fixed_files else "none")


def build(
    source_dir: Path | str,
    dest_dir: Path | str,
    *,
    config: Optional[SiteConfig] = None,
) -> BuildReport:
    """
    Render every top-level template in source_dir into dest_dir.

    The new site is assembled in a staging directory next to dest_dir and only
    replaces dest_dir once every page, asset and fixed file is in place. On
    failure the staging directory is discarded and dest_dir is left untouched.

    Args:
        source_dir: Directory holding page templates, partials, assets and icons.
        dest_dir: Directory to (re)generate; created with parents when missing.
        config: Suffix, directory names, fixed files and site variables. Its
            source/destination fields are ignored in favour of the arguments.

    Returns:
        A BuildReport; ``page_count`` is the number of HTML pages written.

    Raises:
        SourceMissing: source_dir does not exist.
        RenderFailure: a template failed to render; names the page file.
        WriteFailure: the destination could not be written.
    """
    config = config or SiteConfig()
    source = Path(source_dir).expanduser().resolve()
    destination = Path(dest_dir).expanduser().resolve()

    if not source.is_dir():
        raise SourceMissing(source)
    if is_relative_to(source, destination):
        raise WriteFailure(destination, "destination must not contain the source directory")
    # Staging and lock files live beside the destination and would be copied as assets.
    if is_relative_to(destination, source / config.assets_dir):
        raise WriteFailure(destination, "destination must not be inside the assets directory")

    templates = discover_templates(source, config.template_suffix)
    catalog = PartialCatalog.discover(source / config.partials_dir, config.template_suffix)
    engine = TemplateEngine(source, catalog, context=config.context)
    logger.info(
        "Building %d page(s) from %s (%d partial(s) available)",
        len(templates),
        source,
        len(catalog),
    )

    try:
        ensure_directory(destination.parent)
        with file_lock(destination):
            report = _build_locked(engine, templates, config, source, destination)
    except OSError as exc:
        raise WriteFailure(destination, exc) from exc

    logger.info("Built %d page(s) into %s", report.page_count, destination)
    return report


def _build_locked(
    engine: TemplateEngine,
    templates: List[SourceTemplate],
    config: SiteConfig,
    source: Path,
    destination: Path,
) -> BuildReport:
    staging = Path(tempfile.mkdtemp(prefix=f".{destination.name}.staging-", dir=destination.parent))
    try:
        os.chmod(staging, 0o755)
        report = _populate(engine, templates, config, source, destination, staging)
        _publish(staging, destination)
    except BaseException:
        shutil.rmtree(staging, ignore_errors=True)
        raise
    return report


def _populate(
    engine: TemplateEngine,
    templates: List[SourceTemplate],
    config: SiteConfig,
    source: Path,
    destination: Path,
    staging: Path,
) -> BuildReport:
    report = BuildReport(source=source, destination=destination)

    for template in templates:
        try:
            rendered = engine.render_page(template)
        except Exception as exc:
            raise RenderFailure(template.path, f"{type(exc).__name__}: {exc}") from exc

        output = destination / template.output_name
        try:
            write_text_file(staging / template.output_name, rendered)
        except OSError as exc:
            raise WriteFailure(output, exc) from exc
        report.pages.append(RenderedPage(source=template.path, output=output))
        logger.info("Rendered %s → %s", template.name, template.output_name)

    try:
        report.assets_copied = copy_assets(source / config.assets_dir, staging / config.assets_dir)
    except OSError as exc:
        raise WriteFailure(destination / config.assets_dir, exc) from exc

    try:
        report.fixed_files = copy_fixed_files(source, staging, config.fixed_files)
    except OSError as exc:
        raise WriteFailure(destination, exc) from exc

    return report


def _publish(staging: Path, destination: Path) -> None:
    """Replace destination with the fully populated staging directory."""
    try:
        remove_tree(destination)
        os.replace(staging, destination)
    except OSError as exc:
        raise WriteFailure(destination, exc) from exc


def clean(dest_dir: Path | str) -> bool:
    """
    Remove the destination directory.

    Returns:
        True when something was removed, False when it did not exist.
    """
    destination = Path(dest_dir).expanduser().resolve()
    try:
        with file_lock(destination):
            removed = remove_tree(destination)
    except OSError as exc:
        raise WriteFailure(destination, exc) from exc
    if removed:
        logger.info("Removed %s", destination)
    return removed
