"""Distribution archive — the release bundle of a project.

Everything is placed under a single ``<name>-<version>/`` directory:
the project's README/LICENSE/NOTICE, each compiled module's primary,
sources and javadoc archives, and any declared extra files. Files that do
not exist are left out; of two files sharing a name, the first declared wins.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import partial
from pathlib import Path

from gladius.core.archiver import write_archive
from gladius.core.modules import ModuleBuild
from gladius.core.step_graph import StepGraph
from gladius.models.artifacts import Classifier
from gladius.models.project import ProjectSpec
from gladius.models.steps import BuildStep
from gladius.models.versioning import BuildMetadata

logger = logging.getLogger(__name__)

DIST_STEP = "dist"

_BUNDLED: tuple[Classifier | None, ...] = (None, Classifier.SOURCES, Classifier.JAVADOC)


def _bundled_outputs(modules: Sequence[ModuleBuild]) -> list[tuple[str, Path]]:
    bundled: list[tuple[str, Path]] = []
    for module in modules:
        for classifier in _BUNDLED:
            output = module.outputs.get(classifier)
            if output is not None:
                bundled.append((output.step_id, output.path))
    return bundled


def _write_distribution(
    dest: Path,
    prefix: str,
    files: Sequence[Path],
    archives: Sequence[Path],
) -> None:
    entries: dict[str, Path] = {}
    for path in [*files, *archives]:
        if not path.is_file():
            logger.debug("Skipping missing distribution file %s", path)
            continue
        name = f"{prefix}/{path.name}"
        if name in entries:
            logger.warning(
                "Duplicate distribution entry %s from %s ignored (already taken by %s)",
                name,
                path,
                entries[name],
            )
            continue
        entries[name] = path
    write_archive(dest, entries)


def distribution_path(project: ProjectSpec, metadata: BuildMetadata, output_dir: Path) -> Path:
    return project.root / output_dir / f"{project.name}-{metadata.version}.zip"


def declare_distribution(
    project: ProjectSpec,
    modules: Sequence[ModuleBuild],
    graph: StepGraph,
    metadata: BuildMetadata,
    *,
    output_dir: Path = Path("build/distributions"),
) -> BuildStep:
    """Register the ``dist`` step, depending on every bundled archive's step."""
    bundled = _bundled_outputs(modules)
    prefix = f"{project.name}-{metadata.version}"
    files = [project.root / f for f in (*project.dist_files, *project.dist_extras)]

    step = BuildStep(
        step_id=DIST_STEP,
        description="Assemble the distribution archive",
        depends_on=tuple(step_id for step_id, _ in bundled),
        action=partial(
            _write_distribution,
            distribution_path(project, metadata, output_dir),
            prefix,
            files,
            [path for _, path in bundled],
        ),
    )
    return graph.add(step)
