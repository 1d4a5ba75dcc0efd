"""Commit identity resolution from the enclosing git repository.

The metadata directory is located by searching upward from the project
directory. ``GIT_DIR`` in the environment short-circuits the search, the
same way git itself honours it. A ``.git`` *file* (worktrees, submodules)
is followed to the directory it names.

The repository is opened through a scoped handle that is closed on every
exit path, so no lock on the metadata directory outlives configuration.
Abbreviation is delegated to git (``rev-parse --short``), which returns the
shortest prefix that is unique within the repository.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from pathlib import Path
from types import TracebackType

from gladius.models.versioning import CommitIdentity

logger = logging.getLogger(__name__)

_GITDIR_PREFIX = "gitdir:"


class CommitResolutionError(RuntimeError):
    """Base class for failures that leave the build without a commit identity."""


class RepositoryNotFoundError(CommitResolutionError):
    """Raised when no git metadata directory exists at or above the start dir."""


class UnresolvableHeadError(CommitResolutionError):
    """Raised when HEAD does not resolve to a commit (e.g. no commits yet)."""


def _follow_git_file(dot_git: Path) -> Path | None:
    """Resolve a ``.git`` file of the form ``gitdir: <path>``."""
    try:
        content = dot_git.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    if not content.startswith(_GITDIR_PREFIX):
        return None
    target = Path(content[len(_GITDIR_PREFIX):].strip())
    if not target.is_absolute():
        target = dot_git.parent / target
    return target if target.is_dir() else None


def find_git_dir(
    start_dir: Path,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Return the nearest git metadata directory at or above *start_dir*.

    Returns None when none is found. Performs no writes.
    """
    env = os.environ if environ is None else environ
    override = env.get("GIT_DIR")
    if override:
        candidate = Path(override)
        return candidate if candidate.is_dir() else None

    start = Path(start_dir).resolve()
    for directory in (start, *start.parents):
        dot_git = directory / ".git"
        if dot_git.is_dir():
            return dot_git
        if dot_git.is_file():
            target = _follow_git_file(dot_git)
            if target is not None:
                return target
    return None


class GitRepository:
    """Read-only, scoped handle on a git metadata directory.

    Use as a context manager; any call after ``close()`` raises.

    Parameters
    ----------
    git_dir:
        The metadata directory (usually ``<worktree>/.git``).
    git_executable:
        Name or path of the git binary.
    """

    def __init__(self, git_dir: Path, git_executable: str = "git") -> None:
        self.git_dir = Path(git_dir)
        self._git_executable = git_executable
        self._closed = False

    def __enter__(self) -> GitRepository:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if not self._closed:
            logger.debug("Released repository handle for %s", self.git_dir)
        self._closed = True

    def _git(self, *args: str) -> subprocess.CompletedProcess[str]:
        if self._closed:
            raise ValueError(f"Repository handle for {self.git_dir} is closed")
        try:
            return subprocess.run(
                [self._git_executable, "--git-dir", str(self.git_dir), *args],
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise CommitResolutionError(
                f"git executable not found: {self._git_executable}"
            ) from exc

    def resolve(self, ref: str = "HEAD") -> str:
        """Resolve *ref* to a full commit id.

        Raises UnresolvableHeadError when git ran cleanly but *ref* names no
        commit, and CommitResolutionError when git itself refused to run.
        """
        proc = self._git("rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}")
        object_id = proc.stdout.strip()
        if proc.returncode == 0 and object_id:
            return object_id

        stderr = proc.stderr.strip()
        # --quiet exits 1 with no output when the ref simply does not exist
        if proc.returncode == 1 and not stderr:
            raise UnresolvableHeadError(
                f"Cannot resolve {ref} in {self.git_dir}: "
                "the repository has no commits or the reference is broken"
            )
        raise CommitResolutionError(
            f"git failed to resolve {ref} in {self.git_dir} "
            f"(exit {proc.returncode}): {stderr or 'no output'}"
        )

    def abbreviate(self, object_id: str) -> str:
        """Return the shortest unique prefix of *object_id*."""
        proc = self._git("rev-parse", "--short", object_id)
        abbreviated = proc.stdout.strip()
        if proc.returncode != 0 or not abbreviated:
            raise UnresolvableHeadError(
                f"Cannot abbreviate {object_id} in {self.git_dir}: {proc.stderr.strip()}"
            )
        return abbreviated


def open_repository(
    start_dir: Path,
    *,
    git_executable: str = "git",
    environ: Mapping[str, str] | None = None,
) -> GitRepository:
    """Locate and open the repository enclosing *start_dir*.

    Raises RepositoryNotFoundError if there is none.
    """
    git_dir = find_git_dir(start_dir, environ)
    if git_dir is None:
        raise RepositoryNotFoundError(
            f"No git repository found at or above {Path(start_dir).resolve()}"
        )
    return GitRepository(git_dir, git_executable=git_executable)


class CommitResolver:
    """Reads the checked-out commit of the repository enclosing a directory."""

    def __init__(
        self,
        git_executable: str = "git",
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._git_executable = git_executable
        self._environ = environ

    def resolve(self, start_dir: Path) -> CommitIdentity:
        """Return the CommitIdentity for HEAD.

        Raises RepositoryNotFoundError or UnresolvableHeadError.
        """
        with open_repository(
            start_dir, git_executable=self._git_executable, environ=self._environ
        ) as repository:
            full_id = repository.resolve("HEAD")
            abbreviated_id = repository.abbreviate(full_id)

        logger.debug("HEAD of %s is %s (%s)", repository.git_dir, full_id, abbreviated_id)
        return CommitIdentity(full_id=full_id, abbreviated_id=abbreviated_id)
