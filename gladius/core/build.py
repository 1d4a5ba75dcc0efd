"""Build orchestrator — configuration pass, then step execution.

Configuration runs once and in order:

    detect environment -> resolve commit -> compose version
        -> initialize metadata -> declare steps per module -> declare dist

Environment detection and commit resolution are eager; a commit resolution
failure aborts configuration before any step is declared. The resulting
``BuildContext`` is the only carrier of the build's version information and
is passed explicitly to whatever needs it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from gladius.config import GladiusConfig
from gladius.core.assembler import ArtifactAssembler
from gladius.core.commit_resolver import CommitResolver
from gladius.core.distribution import declare_distribution
from gladius.core.environment import EnvironmentProbe
from gladius.core.metadata import MetadataRegistry
from gladius.core.modules import ModuleBuild
from gladius.core.primary_steps import declare_primary_steps
from gladius.core.step_graph import StepGraph
from gladius.models.artifacts import PackagingArtifact
from gladius.models.project import ProjectSpec
from gladius.models.steps import StepState
from gladius.models.versioning import BuildEnvironment, BuildMetadata, CommitIdentity

logger = logging.getLogger(__name__)


class BuildContext:
    """Everything configuration produced, handed to consumers explicitly."""

    def __init__(
        self,
        project: ProjectSpec,
        environment: BuildEnvironment,
        commit: CommitIdentity,
        registry: MetadataRegistry,
    ) -> None:
        self.project = project
        self.environment = environment
        self.commit = commit
        self.registry = registry
        self.graph = StepGraph()
        self.modules: dict[str, ModuleBuild] = {}
        self.artifacts: dict[str, list[PackagingArtifact]] = {}

    @property
    def metadata(self) -> BuildMetadata:
        return self.registry.metadata


class Build:
    """Configures and runs the build of one project.

    Parameters
    ----------
    project:
        The project declaration.
    config:
        Tool configuration. Uses env-driven defaults if not provided.
    probe, resolver:
        Injected collaborators; defaults are built from *config*.
    environ:
        Environment mapping to probe instead of ``os.environ``.
    """

    def __init__(
        self,
        project: ProjectSpec,
        config: GladiusConfig | None = None,
        *,
        probe: EnvironmentProbe | None = None,
        resolver: CommitResolver | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.project = project
        self.config = config or GladiusConfig()
        self.probe = probe or EnvironmentProbe(
            ci_var=self.config.ci_env_var,
            build_number_var=self.config.build_number_env_var,
        )
        self.resolver = resolver or CommitResolver(environ=environ)
        self._environ = environ
        self.context: BuildContext | None = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure_versioning(self) -> BuildContext:
        """Detect the environment, resolve HEAD and freeze the version.

        Idempotent: a second call returns the existing context.
        """
        if self.context is not None:
            return self.context

        environment = self.probe.detect(self._environ)
        if environment.is_ci:
            logger.info("Building on CI.")

        commit = self.resolver.resolve(self.project.root)

        registry = MetadataRegistry()
        metadata = registry.initialize(
            self.project.version,
            environment,
            commit,
            project_name=self.project.name,
            module_name=self.project.module_name,
        )
        logger.info("Building %s %s", self.project.name, metadata.version)

        self.context = BuildContext(
            project=self.project,
            environment=environment,
            commit=commit,
            registry=registry,
        )
        return self.context

    def configure(self) -> BuildContext:
        """Run the full configuration pass and declare every step."""
        context = self.configure_versioning()
        if context.modules:
            return context

        metadata = context.metadata
        assembler = ArtifactAssembler(context.graph)
        for spec in self.project.modules:
            module = ModuleBuild(
                spec,
                self.project.module_dir(spec),
                self.config.output_dir,
                metadata.version,
            )
            context.modules[module.name] = module
            declare_primary_steps(module, context.graph, metadata)
            context.artifacts[module.name] = assembler.declare(module)

        declare_distribution(
            self.project,
            list(context.modules.values()),
            context.graph,
            metadata,
        )
        logger.debug("Declared %d steps", len(context.graph))
        return context

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(
        self,
        targets: Iterable[str] | None = None,
        *,
        fail_fast: bool = False,
    ) -> dict[str, StepState]:
        """Configure if needed, then execute the requested steps."""
        context = self.configure()
        return context.graph.run(targets, fail_fast=fail_fast)
