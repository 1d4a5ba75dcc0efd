"""Version composition — a pure function of base version, environment and commit.

Local builds are snapshots: ``<base>-SNAPSHOT``.
CI builds are pinned to the CI build and the commit:
``<base>-<build_number>.<abbreviated_id>``.
"""

from __future__ import annotations

from gladius.models.versioning import BuildEnvironment, CommitIdentity

SNAPSHOT_SUFFIX = "SNAPSHOT"


def compose(base: str, env: BuildEnvironment, commit: CommitIdentity) -> str:
    """Return the canonical version string. Does not validate *base*."""
    if env.is_ci:
        return f"{base}-{env.build_number}.{commit.abbreviated_id}"
    return f"{base}-{SNAPSHOT_SUFFIX}"
