"""Process configuration — env-driven.

Centralized settings using pydantic-settings. Reads from a .env file and
GLADIUS_* environment variables. The project declaration itself (modules,
base version) lives in ``gladius.toml`` and is loaded by
``gladius.models.project``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class GladiusConfig(BaseSettings):
    """Build tool configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export GLADIUS_LOG_LEVEL=DEBUG
        export GLADIUS_BUILD_NUMBER_ENV_VAR=GITHUB_RUN_NUMBER

    Or via .env file::

        GLADIUS_OUTPUT_DIR=out/libs
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="GLADIUS_",
        env_file_encoding="utf-8",
    )

    log_level: str = "INFO"

    # CI detection: the first variable is checked for presence only
    ci_env_var: str = "CI"
    build_number_env_var: str = "CIRCLE_BUILD_NUM"

    # Project layout
    project_file: Path = Path("gladius.toml")
    output_dir: Path = Path("build/libs")
