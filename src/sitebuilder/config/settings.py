"""
Environment override loading helpers.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .models import SiteConfig


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


class EnvironmentOverrides(BaseModel):
    """
    Build settings read from environment variables.

    Attributes:
        source: Replaces the configured source directory.
        destination: Replaces the configured destination directory.
        log_level: Replaces the --log-level option.
    """
    source: Optional[Path] = Field(default=None, alias="SITEBUILDER_SOURCE")
    destination: Optional[Path] = Field(default=None, alias="SITEBUILDER_DESTINATION")
    log_level: Optional[str] = Field(default=None, alias="SITEBUILDER_LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
    }


@lru_cache(maxsize=1)
def get_overrides() -> EnvironmentOverrides:
    """
    Load overrides from environment/.env exactly once.
    """
    values = {field.alias: os.getenv(field.alias) or None for field in EnvironmentOverrides.model_fields.values()}
    return EnvironmentOverrides(**values)


def apply_overrides(config: SiteConfig, overrides: EnvironmentOverrides) -> SiteConfig:
    """
    Return config with any environment-provided paths applied.
    """
    update = {}
    if overrides.source is not None:
        update["source"] = overrides.source
    if overrides.destination is not None:
        update["destination"] = overrides.destination
    if not update:
        return config
    return config.model_copy(update=update)
