"""Shared test fixtures for Gladius."""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from gladius.core.step_graph import StepGraph
from gladius.models.project import ProjectSpec, load_project
from gladius.models.versioning import BuildEnvironment, CommitIdentity


FULL_ID = "a1b2c3d4e5f60718293a4b5c6d7e8f9012345678"

PROJECT_TOML = """\
name = "jcpi"
description = "Java Chess Protocol Interface"
group = "com.fluxchess.jcpi"
version = "2.0.0"
module_name = "com.fluxchess.jcpi"
dist_extras = ["src/dist/engine-interface.txt"]
"""


def _git(cwd: Path, *args: str) -> str:
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    env = {k: v for k, v in os.environ.items() if not k.startswith("GIT_")}
    env.update({
        "GIT_AUTHOR_NAME": "Test",
        "GIT_AUTHOR_EMAIL": "test@example.com",
        "GIT_COMMITTER_NAME": "Test",
        "GIT_COMMITTER_EMAIL": "test@example.com",
    })
    proc = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    return proc.stdout.strip()


def _write(path: Path, content: str | bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def git() -> Callable[..., str]:
    """Run a git command in a directory with an isolated environment."""
    return _git


@pytest.fixture
def empty_repo(tmp_path: Path) -> Path:
    """A freshly initialized repository with no commits."""
    repo = tmp_path / "empty"
    repo.mkdir()
    _git(repo, "init", "-q")
    return repo


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A repository with a single commit."""
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _write(repo / "README.md", "# jcpi\n")
    _git(repo, "add", "README.md")
    _git(repo, "commit", "-q", "-m", "Initial commit")
    return repo


@pytest.fixture
def project_dir(git_repo: Path) -> Path:
    """A committed single-module project with pre-built compile and doc outputs."""
    _write(git_repo / "gladius.toml", PROJECT_TOML)
    _write(git_repo / "LICENSE", "Apache License 2.0\n")
    _write(git_repo / "src/dist/engine-interface.txt", "uci\n")
    _write(git_repo / "src/main/java/com/fluxchess/jcpi/IEngine.java", "interface IEngine {}\n")
    _write(git_repo / "src/main/resources/engine.properties", "name=jcpi\n")
    _write(git_repo / "build/classes/java/main/com/fluxchess/jcpi/IEngine.class", b"\xca\xfe\xba\xbe")
    _write(git_repo / "build/classes/java/test/com/fluxchess/jcpi/IEngineTest.class", b"\xca\xfe\xba\xbe")
    _write(git_repo / "build/docs/javadoc/index.html", "<html></html>\n")
    return git_repo


@pytest.fixture
def project(project_dir: Path) -> ProjectSpec:
    return load_project(project_dir / "gladius.toml")


@pytest.fixture
def commit() -> CommitIdentity:
    """A fixed commit identity."""
    return CommitIdentity(full_id=FULL_ID, abbreviated_id="a1b2c3d")


@pytest.fixture
def local_env() -> BuildEnvironment:
    return BuildEnvironment(is_ci=False, build_number="")


@pytest.fixture
def ci_env() -> BuildEnvironment:
    return BuildEnvironment(is_ci=True, build_number="417")


@pytest.fixture
def graph() -> StepGraph:
    """An empty step graph."""
    return StepGraph()
