"""
Command line interface for the static site builder.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import ConfigError, SiteConfig, apply_overrides, find_config, get_overrides, load_config
from .pipeline import BuildReport, SiteBuildError, build as build_site, clean as clean_site
from .web import DEFAULT_HOST, DEFAULT_PORT, serve_directory

console = Console()
app = typer.Typer(help="Render Jinja2 page templates into a static HTML site.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _configure_logging(level_name: str) -> None:
    env_override = get_overrides().log_level
    level_str = (env_override or level_name or "info").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "INFO"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_config_path(value: Optional[Path]) -> Optional[Path]:
    """Ensure an explicitly given config path exists and return absolute path."""
    if value is None:
        return None
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No config file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Config path must be a file, got directory: {resolved}")
    return resolved


def _load_site_config(
    config_path: Optional[Path],
    *,
    source: Optional[Path] = None,
    dest: Optional[Path] = None,
) -> SiteConfig:
    """
    Resolve settings: CLI options > environment > config file > defaults.
    """
    path = config_path or find_config()
    try:
        site_config = load_config(path) if path else SiteConfig()
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(code=1) from exc

    site_config = apply_overrides(site_config, get_overrides())
    update = {}
    if source is not None:
        update["source"] = source
    if dest is not None:
        update["destination"] = dest
    if update:
        site_config = site_config.model_copy(update=update)
    logger.debug("Using source %s and destination %s", site_config.source, site_config.destination)
    return site_config


def _print_build_report(report: BuildReport) -> None:
    table = Table(title="Build Summary")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in report.summary_rows():
        table.add_row(key, value)
    console.print(table)


def _run_build(site_config: SiteConfig) -> BuildReport:
    try:
        report = build_site(site_config.source, site_config.destination, config=site_config)
    except SiteBuildError as exc:
        console.print(f"[bold red]Build failed:[/] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(code=1) from exc

    for page in report.pages:
        console.print(f"  Built: {page.output.name}", soft_wrap=True)
    _print_build_report(report)
    console.print(
        f"[bold green]Built {report.page_count} page(s)[/] into {report.destination}",
        soft_wrap=True,
    )
    return report


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show sitebuilder version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Shows metadata when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]sitebuilder[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(
            "[bold yellow]sitebuilder[/] is ready. Run [cyan]sitebuilder build[/] "
            "to render the site.",
        )


@app.command()
def build(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a site.toml file (defaults to ./site.toml when present).",
        callback=_resolve_config_path,
    ),
    source: Optional[Path] = typer.Option(
        None,
        "--source",
        "-s",
        help="Source directory holding the page templates.",
    ),
    dest: Optional[Path] = typer.Option(
        None,
        "--dest",
        "-d",
        help="Destination directory; fully regenerated on every build.",
    ),
) -> None:
    """
    Render every page template and copy static files into the destination.
    """
    site_config = _load_site_config(config, source=source, dest=dest)
    _run_build(site_config)


@app.command()
def serve(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a site.toml file (defaults to ./site.toml when present).",
        callback=_resolve_config_path,
    ),
    source: Optional[Path] = typer.Option(None, "--source", "-s", help="Source directory holding the page templates."),
    dest: Optional[Path] = typer.Option(None, "--dest", "-d", help="Directory to build into and serve."),
    host: str = typer.Option(DEFAULT_HOST, "--host", help="Interface to bind."),
    port: int = typer.Option(DEFAULT_PORT, "--port", "-p", help="Port to listen on."),
    rebuild: bool = typer.Option(
        True,
        "--build/--no-build",
        help="Build the site before serving it.",
    ),
) -> None:
    """
    Build the site and serve the destination for local preview.
    """
    site_config = _load_site_config(config, source=source, dest=dest)
    if rebuild:
        _run_build(site_config)

    destination = site_config.destination.expanduser().resolve()
    console.print(f"[bold blue]Serving[/] {destination} at http://{host}:{port}/ (Ctrl+C to stop)", soft_wrap=True)
    try:
        serve_directory(destination, host=host, port=port)
    except OSError as exc:
        console.print(f"[bold red]Unable to serve:[/] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(code=1) from exc


@app.command()
def clean(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a site.toml file (defaults to ./site.toml when present).",
        callback=_resolve_config_path,
    ),
    dest: Optional[Path] = typer.Option(None, "--dest", "-d", help="Destination directory to remove."),
) -> None:
    """
    Remove the destination directory.
    """
    site_config = _load_site_config(config, dest=dest)
    try:
        removed = clean_site(site_config.destination)
    except SiteBuildError as exc:
        console.print(f"[bold red]Clean failed:[/] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(code=1) from exc

    if removed:
        console.print(f"[bold green]Removed[/] {site_config.destination}", soft_wrap=True)
    else:
        console.print(f"[yellow]Nothing to clean at[/] {site_config.destination}", soft_wrap=True)


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
