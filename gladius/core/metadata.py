"""Single-init holder for the build's version metadata.

The registry is owned by a ``BuildContext`` and passed explicitly to every
consumer; there is no module-level instance. Re-initialization is a no-op
that returns the first BuildMetadata, so the composed version can never be
recomputed or overwritten within a build.
"""

from __future__ import annotations

import logging

from gladius.core.version_composer import compose
from gladius.models.versioning import BuildEnvironment, BuildMetadata, CommitIdentity

logger = logging.getLogger(__name__)


class MetadataNotInitializedError(RuntimeError):
    """Raised when metadata is read before ``initialize()`` ran."""


class MetadataRegistry:
    """Holds the one BuildMetadata of a build."""

    def __init__(self) -> None:
        self._metadata: BuildMetadata | None = None

    @property
    def initialized(self) -> bool:
        return self._metadata is not None

    @property
    def metadata(self) -> BuildMetadata:
        if self._metadata is None:
            raise MetadataNotInitializedError(
                "Build metadata has not been initialized; run configuration first"
            )
        return self._metadata

    def initialize(
        self,
        base: str,
        env: BuildEnvironment,
        commit: CommitIdentity,
        *,
        project_name: str = "",
        module_name: str = "",
    ) -> BuildMetadata:
        """Compose the version and freeze it; later calls return the first result."""
        if self._metadata is not None:
            logger.debug(
                "Build metadata already initialized (%s); ignoring re-initialization",
                self._metadata.version,
            )
            return self._metadata

        self._metadata = BuildMetadata(
            project_name=project_name,
            version=compose(base, env, commit),
            build_number=env.build_number,
            commit_id=commit.full_id,
            abbreviated_commit_id=commit.abbreviated_id,
            module_name=module_name,
        )
        return self._metadata
