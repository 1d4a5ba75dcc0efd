"""Tests for tool config — env-driven settings."""

from __future__ import annotations

from pathlib import Path

from gladius.config import GladiusConfig


class TestGladiusConfig:
    def test_defaults(self):
        config = GladiusConfig(_env_file=None)
        assert config.log_level == "INFO"
        assert config.ci_env_var == "CI"
        assert config.build_number_env_var == "CIRCLE_BUILD_NUM"

    def test_default_paths(self):
        config = GladiusConfig(_env_file=None)
        assert config.project_file == Path("gladius.toml")
        assert config.output_dir == Path("build/libs")

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("GLADIUS_BUILD_NUMBER_ENV_VAR", "GITHUB_RUN_NUMBER")
        monkeypatch.setenv("GLADIUS_LOG_LEVEL", "DEBUG")
        config = GladiusConfig(_env_file=None)
        assert config.build_number_env_var == "GITHUB_RUN_NUMBER"
        assert config.log_level == "DEBUG"

    def test_env_file(self, tmp_path: Path):
        env_file = tmp_path / ".env"
        env_file.write_text("GLADIUS_OUTPUT_DIR=out/libs\n", encoding="utf-8")
        config = GladiusConfig(_env_file=env_file)
        assert config.output_dir == Path("out/libs")
