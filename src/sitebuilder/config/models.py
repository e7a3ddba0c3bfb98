"""
Pydantic models for validating site build configuration files.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

CONFIG_FILENAME = "site.toml"
DEFAULT_FIXED_FILES = (
    "favicon.ico",
    "favicon.svg",
    "favicon.png",
    "apple-touch-icon.png",
)


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


def _is_plain_name(value: str) -> bool:
    return bool(value) and value not in {".", ".."} and "/" not in value and "\\" not in value


class SiteConfig(BaseModel):
    """
    Configuration for one site build.

    Attributes:
        source: Directory holding page templates, partials, assets and icons.
        destination: Directory that receives the generated site.
        template_suffix: File suffix marking page and partial templates.
        partials_dir: Name of the include-only template directory under source.
        assets_dir: Name of the static assets directory under source.
        fixed_files: Root-level files copied verbatim when present.
        context: Site-wide variables made available to every page render.
    """
    source: Path = Path("site")
    destination: Path = Path("dist")
    template_suffix: str = ".tmpl"
    partials_dir: str = "partials"
    assets_dir: str = "assets"
    fixed_files: List[str] = Field(default_factory=lambda: list(DEFAULT_FIXED_FILES))
    context: Dict[str, Any] = Field(default_factory=dict)

    model_config = {
        "extra": "forbid",
    }

    @field_validator("template_suffix")
    @classmethod
    def _check_suffix(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError("template_suffix must start with '.' and name an extension")
        if "/" in value or "\\" in value:
            raise ValueError("template_suffix must not contain path separators")
        if value == ".html":
            raise ValueError("template_suffix must differ from the .html output suffix")
        return value

    @field_validator("partials_dir", "assets_dir")
    @classmethod
    def _check_directory_name(cls, value: str) -> str:
        if not _is_plain_name(value):
            raise ValueError(f"{value!r} must be a single directory name inside the source root")
        return value

    @field_validator("fixed_files")
    @classmethod
    def _check_fixed_files(cls, value: List[str]) -> List[str]:
        for name in value:
            if not _is_plain_name(name):
                raise ValueError(f"fixed file {name!r} must be a plain file name")
        return value

    def resolve_paths(self, base: Path) -> "SiteConfig":
        """
        Return a copy whose relative source/destination are anchored at base.
        """
        base = Path(base).expanduser()
        return self.model_copy(
            update={
                "source": _anchor(self.source, base),
                "destination": _anchor(self.destination, base),
            }
        )


def _anchor(path: Path, base: Path) -> Path:
    path = Path(path).expanduser()
    if path.is_absolute():
        return path
    return base / path


def find_config(directory: Optional[Path] = None) -> Optional[Path]:
    """
    Return the default config file in directory (cwd by default), if present.
    """
    candidate = Path(directory or Path.cwd()) / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(path: Path | str) -> SiteConfig:
    """
    Load and validate a TOML config file into a SiteConfig instance.

    Relative ``source`` and ``destination`` paths are resolved against the
    directory containing the config file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        A validated SiteConfig object.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as handle:
            raw_data: Dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in configuration file: {exc}") from exc

    raw_data = _normalize_toml_schema(raw_data)

    try:
        config = SiteConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    return config.resolve_paths(config_path.parent)


def _normalize_toml_schema(data: Any) -> Dict[str, Any]:
    """
    Accept the optional [site] table as an alias for top-level keys.
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a TOML table/object.")

    normalized = dict(data)
    site_table = normalized.pop("site", None)
    if site_table is not None:
        if not isinstance(site_table, dict):
            raise ConfigError("Invalid [site] block; expected a table.")
        duplicated = sorted(set(site_table) & set(normalized))
        if duplicated:
            raise ConfigError(f"Keys defined both in [site] and at the top level: {', '.join(duplicated)}")
        normalized.update(site_table)

    context = normalized.get("context")
    if context is not None and not isinstance(context, dict):
        raise ConfigError("Invalid [context] block; expected a table of template variables.")
    return normalized
