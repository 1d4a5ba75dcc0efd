"""Versioning models — environment, commit identity, build metadata."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class BuildEnvironment(BaseModel):
    """Whether the build runs under CI, and the CI-assigned build number."""

    model_config = ConfigDict(frozen=True)

    is_ci: bool = False
    build_number: str = ""  # empty outside CI or when CI does not set one


class CommitIdentity(BaseModel):
    """The checked-out commit: its full id and its shortest unique prefix."""

    model_config = ConfigDict(frozen=True)

    full_id: str
    abbreviated_id: str

    @model_validator(mode="after")
    def _abbreviation_is_prefix(self) -> CommitIdentity:
        if (
            not self.abbreviated_id
            or not self.full_id.startswith(self.abbreviated_id)
            or len(self.abbreviated_id) >= len(self.full_id)
        ):
            raise ValueError(
                f"abbreviated_id {self.abbreviated_id!r} is not a strict prefix of "
                f"full_id {self.full_id!r}"
            )
        return self


class BuildMetadata(BaseModel):
    """Read-only version information shared by every downstream consumer.

    Created once per build by ``MetadataRegistry.initialize()``. Manifest
    writers, the distribution step and log statements read from here and
    never re-derive the version themselves.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = ""
    version: str
    build_number: str = ""
    commit_id: str
    abbreviated_commit_id: str
    module_name: str = ""  # Automatic-Module-Name, when declared

    def manifest_attributes(self, title: str | None = None) -> dict[str, str]:
        """Return the attributes written into the primary archive's manifest."""
        attributes: dict[str, str] = {}
        if self.module_name:
            attributes["Automatic-Module-Name"] = self.module_name
        attributes["Implementation-Title"] = title or self.project_name
        attributes["Implementation-Version"] = self.version
        attributes["Build-Number"] = self.build_number
        attributes["Commit-Id"] = self.commit_id
        return attributes
