from pathlib import Path
import textwrap

import pytest
from typer.testing import CliRunner

from conftest import write_template
from sitebuilder import cli
from sitebuilder.config import settings


def test_build_command_reports_pages(runner: CliRunner, sample_site: Path, tmp_path: Path) -> None:
    dest = tmp_path / "dist"

    result = runner.invoke(cli.app, ["build", "--source", str(sample_site), "--dest", str(dest)])

    assert result.exit_code == 0, result.output
    assert "Built: a.html" in result.output
    assert "Built: b.html" in result.output
    assert "Built 2 page(s)" in result.output
    assert (dest / "a.html").exists()


def test_build_command_uses_config_file(runner: CliRunner, sample_site: Path, tmp_path: Path) -> None:
    config_path = tmp_path / "site.toml"
    config_path.write_text(
        textwrap.dedent(
            """
            source = "src"
            destination = "public"
            """
        ),
        encoding="utf-8",
    )

    result = runner.invoke(cli.app, ["build", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "public" / "b.html").exists()


def test_build_command_picks_up_site_toml_in_cwd(
    runner: CliRunner,
    sample_site: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    (tmp_path / "site.toml").write_text('source = "src"\ndestination = "out"\n', encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli.app, ["build"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "out" / "a.html").exists()


def test_environment_destination_is_used(
    runner: CliRunner,
    sample_site: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("SITEBUILDER_DESTINATION", str(tmp_path / "from-env"))
    settings.get_overrides.cache_clear()

    result = runner.invoke(cli.app, ["build", "--source", str(sample_site)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "from-env" / "a.html").exists()


def test_build_failure_exits_non_zero_and_names_file(
    runner: CliRunner,
    sample_site: Path,
    tmp_path: Path,
) -> None:
    write_template(sample_site / "broken.tmpl", '{{ partial("missing") }}\n')

    result = runner.invoke(cli.app, ["build", "--source", str(sample_site), "--dest", str(tmp_path / "dist")])

    assert result.exit_code == 1
    assert "Build failed" in result.output
    assert "broken.tmpl" in result.output
    assert not (tmp_path / "dist").exists()


def test_missing_source_exits_non_zero(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(
        cli.app,
        ["build", "--source", str(tmp_path / "nowhere"), "--dest", str(tmp_path / "dist")],
    )

    assert result.exit_code == 1
    assert "Source directory not found" in result.output


def test_invalid_config_exits_non_zero(runner: CliRunner, tmp_path: Path) -> None:
    config_path = tmp_path / "site.toml"
    config_path.write_text('bogus = 1\n', encoding="utf-8")

    result = runner.invoke(cli.app, ["build", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_missing_config_path_is_a_usage_error(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["build", "--config", str(tmp_path / "absent.toml")])

    assert result.exit_code == 2


def test_clean_command_removes_destination(runner: CliRunner, sample_site: Path, tmp_path: Path) -> None:
    dest = tmp_path / "dist"
    runner.invoke(cli.app, ["build", "--source", str(sample_site), "--dest", str(dest)])
    assert dest.exists()

    result = runner.invoke(cli.app, ["clean", "--dest", str(dest)])

    assert result.exit_code == 0, result.output
    assert "Removed" in result.output
    assert not dest.exists()
    assert (sample_site / "a.tmpl").exists()


def test_clean_command_without_destination(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["clean", "--dest", str(tmp_path / "dist")])

    assert result.exit_code == 0, result.output
    assert "Nothing to clean" in result.output


def test_serve_builds_then_serves_destination(
    runner: CliRunner,
    sample_site: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    served = {}

    def fake_serve(directory, *, host, port):
        served.update(directory=directory, host=host, port=port)

    monkeypatch.setattr(cli, "serve_directory", fake_serve)
    dest = tmp_path / "dist"

    result = runner.invoke(
        cli.app,
        ["serve", "--source", str(sample_site), "--dest", str(dest), "--port", "8123"],
    )

    assert result.exit_code == 0, result.output
    assert (dest / "a.html").exists()
    assert served == {"directory": dest.resolve(), "host": "127.0.0.1", "port": 8123}


def test_serve_no_build_skips_rendering(
    runner: CliRunner,
    sample_site: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(cli, "serve_directory", lambda directory, **_: None)
    dest = tmp_path / "dist"

    result = runner.invoke(cli.app, ["serve", "--source", str(sample_site), "--dest", str(dest), "--no-build"])

    assert result.exit_code == 0, result.output
    assert not dest.exists()


def test_version_flag(runner: CliRunner) -> None:
    result = runner.invoke(cli.app, ["--version"])

    assert result.exit_code == 0
    assert "sitebuilder" in result.output
