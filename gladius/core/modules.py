"""Per-module build state: resolved directories, step ids, publishable outputs."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from gladius.models.artifacts import Classifier, PublishableOutput
from gladius.models.project import ModuleSpec

# Step names every compiled module owns. Packaging steps hang off these.
CLASSES_STEP = "classes"
JAVADOC_STEP = "javadoc"
TEST_CLASSES_STEP = "testClasses"
JAR_STEP = "jar"

# Canonical enumeration order of a module's publishable outputs.
OUTPUT_ORDER: tuple[Classifier | None, ...] = (
    None,
    Classifier.SOURCES,
    Classifier.JAVADOC,
    Classifier.TESTS,
)


class PublishableOutputs:
    """Ordered collection of a module's publishable outputs.

    Iteration always yields the primary artifact first, then sources,
    javadoc and tests, whatever order they were registered in.
    """

    def __init__(self) -> None:
        self._outputs: dict[Classifier | None, PublishableOutput] = {}

    def add(self, output: PublishableOutput) -> None:
        if output.classifier in self._outputs:
            label = output.classifier.value if output.classifier else "primary"
            raise ValueError(f"A {label} output is already registered")
        self._outputs[output.classifier] = output

    def get(self, classifier: Classifier | None) -> PublishableOutput | None:
        return self._outputs.get(classifier)

    @property
    def primary(self) -> PublishableOutput | None:
        return self._outputs.get(None)

    def __iter__(self) -> Iterator[PublishableOutput]:
        for classifier in OUTPUT_ORDER:
            if classifier in self._outputs:
                yield self._outputs[classifier]

    def __len__(self) -> int:
        return len(self._outputs)


class ModuleBuild:
    """A module as seen by one build.

    Parameters
    ----------
    spec:
        The module declaration.
    directory:
        The module's directory; all layout paths are relative to it.
    libs_dir:
        Where archives are written, relative to *directory* unless absolute.
    archive_version:
        Version string used in archive file names.
    """

    def __init__(
        self,
        spec: ModuleSpec,
        directory: Path,
        libs_dir: Path,
        archive_version: str,
    ) -> None:
        self.spec = spec
        self.directory = Path(directory)
        self.libs_dir = self.directory / libs_dir
        self.archive_version = archive_version
        self.outputs = PublishableOutputs()

    @property
    def name(self) -> str:
        return self.spec.name

    def step_id(self, step: str) -> str:
        return f"{self.name}:{step}"

    def archive_path(self, classifier: Classifier | None = None) -> Path:
        suffix = f"-{classifier.value}" if classifier is not None else ""
        return self.libs_dir / f"{self.name}-{self.archive_version}{suffix}.jar"

    @property
    def source_roots(self) -> tuple[Path, ...]:
        return tuple(self.directory / d for d in self.spec.source_dirs)

    @property
    def classes_dir(self) -> Path:
        return self.directory / self.spec.classes_dir

    @property
    def test_classes_dir(self) -> Path:
        return self.directory / self.spec.test_classes_dir

    @property
    def docs_dir(self) -> Path:
        return self.directory / self.spec.docs_dir
