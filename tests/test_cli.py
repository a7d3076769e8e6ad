"""Tests for the license-sync command line."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from license_cli.cli import cli
from tests.conftest import FakeSession, make_response

pytestmark = pytest.mark.integration


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _invoke(runner: CliRunner, project_dir: Path, *args: str):
    return runner.invoke(cli, ["--project-dir", str(project_dir), *args], obj={}, env={"COLUMNS": "200"})


def test_template_update_then_assemble(runner: CliRunner, project_dir: Path, fake_session: FakeSession) -> None:
    year = date.today().year

    result = _invoke(runner, project_dir, "template-update")
    assert result.exit_code == 0, result.output
    assert "licenseTemplateUpdate" in result.output
    template = project_dir / "docs" / "templates" / "LICENSE.txt"
    assert "Copyright (c) 2016-${year}, Acme" in template.read_text(encoding="utf-8")

    result = _invoke(runner, project_dir, "assemble")
    assert result.exit_code == 0, result.output
    license_text = (project_dir / "LICENSE.txt").read_text(encoding="utf-8")
    assert f"Copyright (c) 2016-{year}, Acme" in license_text
    assert "${year}" not in license_text
    assert len(fake_session.calls) == 1


def test_template_update_options_override_config(
    runner: CliRunner, project_dir: Path, fake_session: FakeSession
) -> None:
    result = _invoke(
        runner, project_dir, "template-update",
        "--name", "Globex", "--template", "tpl/LICENSE", "--timeout", "3",
    )

    assert result.exit_code == 0, result.output
    assert "Globex" in (project_dir / "tpl" / "LICENSE").read_text(encoding="utf-8")
    assert fake_session.calls[0]["timeout"] == 3.0


def test_update_writes_custom_output(runner: CliRunner, project_dir: Path) -> None:
    template = project_dir / "docs" / "templates" / "LICENSE.txt"
    template.parent.mkdir(parents=True)
    template.write_text("(c) ${year} Acme\n", encoding="utf-8")

    result = _invoke(runner, project_dir, "update", "--output", "COPYING")

    assert result.exit_code == 0, result.output
    assert (project_dir / "COPYING").read_text(encoding="utf-8") == f"(c) {date.today().year} Acme\n"


def test_missing_url_fails_with_message(runner: CliRunner, tmp_path: Path) -> None:
    result = _invoke(runner, tmp_path, "template-update")

    assert result.exit_code == 1
    assert "license URL must be set" in result.output
    assert not (tmp_path / "docs").exists()


def test_fetch_failure_exits_non_zero(runner: CliRunner, project_dir: Path, fake_session: FakeSession) -> None:
    fake_session.response = make_response("gone", status=500)

    result = _invoke(runner, project_dir, "template-update")

    assert result.exit_code == 1
    assert "Could not download license" in result.output


def test_assemble_without_template_fails(runner: CliRunner, project_dir: Path) -> None:
    result = _invoke(runner, project_dir, "assemble")

    assert result.exit_code == 1
    assert "template-update" in result.output
    assert not (project_dir / "LICENSE.txt").exists()


def test_run_unknown_task(runner: CliRunner, project_dir: Path) -> None:
    result = _invoke(runner, project_dir, "run", "publish")

    assert result.exit_code == 1
    assert "Task 'publish' not found" in result.output


def test_tasks_lists_license_tasks(runner: CliRunner, project_dir: Path) -> None:
    result = _invoke(runner, project_dir, "tasks")

    assert result.exit_code == 0, result.output
    assert "licenseTemplateUpdate" in result.output
    assert "Update license file from template" in result.output
    assert "licenseUpdate" in result.output


def test_headers_lists_excluded_files(runner: CliRunner, project_dir: Path) -> None:
    (project_dir / "package.json").write_text("{}\n", encoding="utf-8")
    (project_dir / "src").mkdir()
    (project_dir / "src" / "app.py").write_text("pass\n", encoding="utf-8")
    (project_dir / "build").mkdir()
    (project_dir / "build" / "out.py").write_text("pass\n", encoding="utf-8")

    result = _invoke(runner, project_dir, "headers", "--excluded")

    assert result.exit_code == 0, result.output
    assert "package.json" in result.output
    assert "src/app.py" not in result.output
    assert "out.py" not in result.output
    assert "1 excluded" in result.output


def test_headers_lists_checked_files(runner: CliRunner, project_dir: Path) -> None:
    (project_dir / "src").mkdir()
    (project_dir / "src" / "app.py").write_text("pass\n", encoding="utf-8")

    result = _invoke(runner, project_dir, "headers")

    assert result.exit_code == 0, result.output
    assert "src/app.py" in result.output
    assert "checked" in result.output


def test_config_show(runner: CliRunner, project_dir: Path) -> None:
    result = _invoke(runner, project_dir, "config", "--show")

    assert result.exit_code == 0, result.output
    assert "Acme" in result.output
    assert "2016" in result.output
    assert "**/*.json" in result.output


def test_config_show_reports_invalid_file(runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "license.yml").write_text("inception_year: soon\n", encoding="utf-8")

    result = _invoke(runner, tmp_path, "config", "--show")

    assert result.exit_code == 1
    assert "inception_year" in result.output


def test_init_creates_loadable_config(runner: CliRunner, tmp_path: Path) -> None:
    result = _invoke(runner, tmp_path, "init", "--name", "Acme", "--inception-year", "2016",
                     "--url", "https://example.org/LICENSE")

    assert result.exit_code == 0, result.output
    data = yaml.safe_load((tmp_path / "license.yml").read_text(encoding="utf-8"))
    assert data["organization"]["name"] == "Acme"
    assert data["inception_year"] == 2016
    assert data["license"]["source_url"] == "https://example.org/LICENSE"


def test_init_refuses_to_overwrite(runner: CliRunner, project_dir: Path) -> None:
    before = (project_dir / "license.yml").read_text(encoding="utf-8")

    result = _invoke(runner, project_dir, "init")

    assert result.exit_code == 1
    assert (project_dir / "license.yml").read_text(encoding="utf-8") == before


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"], obj={})

    assert result.exit_code == 0
    assert "license-sync version" in result.output
