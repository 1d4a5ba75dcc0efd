"""Packaging artifact models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class Classifier(str, Enum):
    """Suffix naming a secondary archive derived from a module's outputs."""

    SOURCES = "sources"
    JAVADOC = "javadoc"
    TESTS = "tests"


class PackagingArtifact(BaseModel):
    """A declared secondary archive for one module.

    Each instance maps 1:1 onto one of the module's existing outputs:
    its source sets, its generated API docs, or its compiled tests.
    """

    model_config = ConfigDict(frozen=True)

    module: str
    classifier: Classifier
    step_id: str  # the packaging step that produces the archive
    depends_on: str  # the primary step that must run first
    content_roots: tuple[Path, ...] = ()
    archive_path: Path


class PublishableOutput(BaseModel):
    """One entry of a module's publishable outputs collection."""

    model_config = ConfigDict(frozen=True)

    classifier: Classifier | None = None  # None marks the primary artifact
    path: Path
    step_id: str

    @property
    def is_primary(self) -> bool:
        return self.classifier is None
