"""Primary steps of a compiled module.

Compilation and API-doc generation are done by external tooling; these
steps verify that tooling left its output where the module declares it,
and ``jar`` archives the compiled output with the build's manifest
attributes.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path

from gladius.core.archiver import collect_tree, write_archive
from gladius.core.modules import (
    CLASSES_STEP,
    JAR_STEP,
    JAVADOC_STEP,
    TEST_CLASSES_STEP,
    ModuleBuild,
)
from gladius.core.step_graph import StepGraph
from gladius.models.artifacts import PublishableOutput
from gladius.models.steps import BuildStep
from gladius.models.versioning import BuildMetadata


class MissingOutputError(FileNotFoundError):
    """Raised when an expected compile or doc output directory is absent."""


def _require_dir(path: Path, what: str) -> None:
    if not path.is_dir():
        raise MissingOutputError(f"{what} not found at {path}")


def _write_primary(module: ModuleBuild, metadata: BuildMetadata, title: str) -> None:
    write_archive(
        module.archive_path(),
        collect_tree(module.classes_dir),
        manifest=metadata.manifest_attributes(title=title),
    )


def declare_primary_steps(
    module: ModuleBuild,
    graph: StepGraph,
    metadata: BuildMetadata,
    *,
    title: str | None = None,
) -> list[BuildStep]:
    """Register ``classes``, ``javadoc``, ``testClasses`` and ``jar`` for *module*.

    Aggregate modules (``compiled = false``) get no steps. The primary
    archive is registered as the module's first publishable output.
    """
    if not module.spec.compiled:
        return []

    classes = module.step_id(CLASSES_STEP)
    steps = [
        BuildStep(
            step_id=classes,
            description="Verify compiled classes",
            action=partial(_require_dir, module.classes_dir, "Compiled classes"),
        ),
        BuildStep(
            step_id=module.step_id(JAVADOC_STEP),
            description="Verify generated API documentation",
            depends_on=(classes,),
            action=partial(_require_dir, module.docs_dir, "API documentation"),
        ),
        BuildStep(
            step_id=module.step_id(TEST_CLASSES_STEP),
            description="Verify compiled test classes",
            depends_on=(classes,),
            action=partial(_require_dir, module.test_classes_dir, "Compiled test classes"),
        ),
        BuildStep(
            step_id=module.step_id(JAR_STEP),
            description="Assemble the primary archive",
            depends_on=(classes,),
            action=partial(_write_primary, module, metadata, title or metadata.project_name),
        ),
    ]
    for step in steps:
        graph.add(step)

    module.outputs.add(
        PublishableOutput(path=module.archive_path(), step_id=module.step_id(JAR_STEP))
    )
    return steps
