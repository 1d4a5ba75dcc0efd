"""Secondary packaging artifacts: sources, javadoc and tests archives.

For every module with a primary compile step, three packaging steps are
declared, each depending on the primary step whose output it archives:

    sourcesJar -> classes       (source sets)
    javadocJar -> javadoc       (generated API docs)
    testsJar   -> testClasses   (compiled tests)

Each archive is registered as a publishable output of the module. A failed
primary step blocks its packaging step through the step graph.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from pathlib import Path

from gladius.core.archiver import collect_trees, write_archive
from gladius.core.modules import (
    CLASSES_STEP,
    JAVADOC_STEP,
    TEST_CLASSES_STEP,
    ModuleBuild,
)
from gladius.core.step_graph import StepGraph
from gladius.models.artifacts import Classifier, PackagingArtifact, PublishableOutput
from gladius.models.steps import BuildStep

logger = logging.getLogger(__name__)

_Roots = Callable[[ModuleBuild], tuple[Path, ...]]

# (classifier, packaging step, primary step it depends on, content roots)
_PACKAGING: tuple[tuple[Classifier, str, str, _Roots], ...] = (
    (Classifier.SOURCES, "sourcesJar", CLASSES_STEP, lambda m: m.source_roots),
    (Classifier.JAVADOC, "javadocJar", JAVADOC_STEP, lambda m: (m.docs_dir,)),
    (Classifier.TESTS, "testsJar", TEST_CLASSES_STEP, lambda m: (m.test_classes_dir,)),
)


def package(artifact: PackagingArtifact) -> None:
    """Archive an artifact's content roots to its archive path."""
    write_archive(artifact.archive_path, collect_trees(artifact.content_roots))


class ArtifactAssembler:
    """Declares the three secondary archives of each compiled module.

    Parameters
    ----------
    graph:
        The step graph the packaging steps are added to.
    """

    def __init__(self, graph: StepGraph) -> None:
        self._graph = graph

    def declare(self, module: ModuleBuild) -> list[PackagingArtifact]:
        """Declare sources, javadoc and tests artifacts for *module*.

        Returns them in that order; returns nothing for modules without a
        compile step.
        """
        if module.step_id(CLASSES_STEP) not in self._graph:
            logger.debug("Module %s has no compile step; nothing to package", module.name)
            return []

        artifacts: list[PackagingArtifact] = []
        for classifier, step_name, primary_step, roots in _PACKAGING:
            artifact = PackagingArtifact(
                module=module.name,
                classifier=classifier,
                step_id=module.step_id(step_name),
                depends_on=module.step_id(primary_step),
                content_roots=roots(module),
                archive_path=module.archive_path(classifier),
            )
            self._graph.add(
                BuildStep(
                    step_id=artifact.step_id,
                    description=f"Assemble the {classifier.value} archive",
                    depends_on=(artifact.depends_on,),
                    action=partial(package, artifact),
                )
            )
            module.outputs.add(
                PublishableOutput(
                    classifier=classifier,
                    path=artifact.archive_path,
                    step_id=artifact.step_id,
                )
            )
            artifacts.append(artifact)
        return artifacts
