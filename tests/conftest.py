from pathlib import Path
import textwrap

import pytest
from typer.testing import CliRunner

from sitebuilder.config import settings

LOGO_BYTES = bytes(range(256)) * 4


def write_template(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    for name in ("SITEBUILDER_SOURCE", "SITEBUILDER_DESTINATION", "SITEBUILDER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings.get_overrides.cache_clear()
    yield
    settings.get_overrides.cache_clear()


@pytest.fixture
def sample_site(tmp_path: Path) -> Path:
    """
    Write a small source tree: two pages sharing a header partial, one asset.
    """
    source = tmp_path / "src"
    write_template(
        source / "partials" / "header.tmpl",
        """
        <!DOCTYPE html>
        <html>
        <head><title>{{ title }}</title></head>
        <body>
        <header>{{ title }}</header>
        """,
    )
    write_template(
        source / "partials" / "footer.tmpl",
        """
        <footer>{{ page.stem }}</footer>
        </body>
        </html>
        """,
    )
    write_template(
        source / "a.tmpl",
        """
        {% set title = "Page A" %}
        {{ partial("header") }}
        <p>Standard content for A</p>
        {{ partial("footer") }}
        """,
    )
    write_template(
        source / "b.tmpl",
        """
        {% set title = "Page B" %}
        {{ partial("header") }}
        <p>Content for B</p>
        {{ partial("footer") }}
        """,
    )
    logo = source / "assets" / "logo.png"
    logo.parent.mkdir(parents=True, exist_ok=True)
    logo.write_bytes(LOGO_BYTES)
    return source
