"""Gladius data models — all Pydantic v2, all frozen (immutable)."""

from gladius.models.artifacts import Classifier, PackagingArtifact, PublishableOutput
from gladius.models.project import ModuleSpec, ProjectConfigError, ProjectSpec, load_project
from gladius.models.steps import StepState
from gladius.models.versioning import BuildEnvironment, BuildMetadata, CommitIdentity

__all__ = [
    # versioning
    "BuildEnvironment",
    "CommitIdentity",
    "BuildMetadata",
    # artifacts
    "Classifier",
    "PackagingArtifact",
    "PublishableOutput",
    # project
    "ModuleSpec",
    "ProjectSpec",
    "ProjectConfigError",
    "load_project",
    # steps
    "StepState",
]
