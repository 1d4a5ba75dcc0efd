"""Unit tests for the CLI — Typer command registration and basic behavior."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from gladius.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _local_build(monkeypatch):
    """Run every CLI test as a local (non-CI) build."""
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.delenv("CIRCLE_BUILD_NUM", raising=False)
    monkeypatch.delenv("GIT_DIR", raising=False)


def _invoke(*args: str):
    return runner.invoke(app, ["--log-level", "WARNING", *args])


class TestCliApp:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        # Typer's no_args_is_help may exit with 0 or 2 depending on version
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("version", "info", "manifest", "package"):
            assert command in result.output

    @pytest.mark.parametrize("command", ["version", "info", "manifest", "package"])
    def test_command_help(self, command: str):
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0


class TestVersionCommand:
    def test_prints_snapshot_version(self, project_dir: Path):
        result = _invoke("version", "--project", str(project_dir / "gladius.toml"))
        assert result.exit_code == 0
        assert result.output.strip() == "2.0.0-SNAPSHOT"

    def test_prints_ci_version(self, project_dir: Path, monkeypatch, git):
        monkeypatch.setenv("CI", "true")
        monkeypatch.setenv("CIRCLE_BUILD_NUM", "417")
        short = git(project_dir, "rev-parse", "--short", "HEAD")
        result = _invoke("version", "--project", str(project_dir / "gladius.toml"))
        assert result.exit_code == 0
        assert result.output.strip() == f"2.0.0-417.{short}"

    def test_no_repository_fails(self, tmp_path: Path):
        project_file = tmp_path / "gladius.toml"
        project_file.write_text('name = "jcpi"\nversion = "2.0.0"\n', encoding="utf-8")
        result = _invoke("version", "--project", str(project_file))
        assert result.exit_code == 1
        assert "repository discovery" in result.output

    def test_empty_repository_fails(self, empty_repo: Path):
        project_file = empty_repo / "gladius.toml"
        project_file.write_text('name = "jcpi"\nversion = "2.0.0"\n', encoding="utf-8")
        result = _invoke("version", "--project", str(project_file))
        assert result.exit_code == 1
        assert "HEAD resolution" in result.output

    def test_unreadable_repository_fails(self, project_dir: Path):
        (project_dir / ".git" / "config").write_text("[core\nbroken", encoding="utf-8")
        result = _invoke("version", "--project", str(project_dir / "gladius.toml"))
        assert result.exit_code == 1
        assert "commit resolution" in result.output

    def test_missing_project_file(self, tmp_path: Path):
        result = _invoke("version", "--project", str(tmp_path / "nope.toml"))
        assert result.exit_code == 1
        assert "project configuration" in result.output


class TestManifestCommand:
    def test_prints_attributes(self, project_dir: Path, git):
        full = git(project_dir, "rev-parse", "HEAD")
        result = _invoke("manifest", "--project", str(project_dir / "gladius.toml"))
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert "Automatic-Module-Name: com.fluxchess.jcpi" in lines
        assert "Implementation-Title: jcpi" in lines
        assert "Implementation-Version: 2.0.0-SNAPSHOT" in lines
        assert f"Commit-Id: {full}" in lines


class TestPackageCommand:
    def test_package_builds_everything(self, project_dir: Path):
        result = _invoke("package", "--project", str(project_dir / "gladius.toml"))
        assert result.exit_code == 0, result.output
        libs = project_dir / "build" / "libs"
        for suffix in ("", "-sources", "-javadoc", "-tests"):
            assert (libs / f"jcpi-2.0.0-SNAPSHOT{suffix}.jar").is_file()
        assert (project_dir / "build" / "distributions" / "jcpi-2.0.0-SNAPSHOT.zip").is_file()

    def test_package_single_step(self, project_dir: Path):
        result = _invoke(
            "package", "--project", str(project_dir / "gladius.toml"), "--step", "jcpi:sourcesJar"
        )
        assert result.exit_code == 0, result.output
        libs = project_dir / "build" / "libs"
        assert (libs / "jcpi-2.0.0-SNAPSHOT-sources.jar").is_file()
        assert not (libs / "jcpi-2.0.0-SNAPSHOT-tests.jar").exists()

    def test_package_failure_exits_nonzero(self, project_dir: Path):
        import shutil

        shutil.rmtree(project_dir / "build" / "docs")
        result = _invoke("package", "--project", str(project_dir / "gladius.toml"))
        assert result.exit_code == 1
        assert "jcpi:javadoc" in result.output

    def test_package_unknown_step(self, project_dir: Path):
        result = _invoke("package", "--project", str(project_dir / "gladius.toml"), "--step", "nope")
        assert result.exit_code == 1
        assert "Unknown step" in result.output


class TestInfoCommand:
    def test_info_shows_version(self, project_dir: Path):
        result = _invoke("info", "--project", str(project_dir / "gladius.toml"))
        assert result.exit_code == 0
        assert "2.0.0-SNAPSHOT" in result.output
        assert "Publishable Outputs" in result.output


class TestLogLevel:
    def test_invalid_flag_rejected(self, project_dir: Path):
        result = runner.invoke(
            app, ["--log-level", "verbose", "version", "--project", str(project_dir / "gladius.toml")]
        )
        assert result.exit_code == 1
        assert "Invalid log level" in result.output

    def test_invalid_environment_value_rejected(self, project_dir: Path, monkeypatch):
        monkeypatch.setenv("GLADIUS_LOG_LEVEL", "loud")
        result = runner.invoke(app, ["version", "--project", str(project_dir / "gladius.toml")])
        assert result.exit_code == 1
        assert "Invalid log level" in result.output

    def test_level_is_case_insensitive(self, project_dir: Path):
        result = runner.invoke(
            app, ["--log-level", "warning", "version", "--project", str(project_dir / "gladius.toml")]
        )
        assert result.exit_code == 0
        assert result.output.strip() == "2.0.0-SNAPSHOT"
