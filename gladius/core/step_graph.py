"""Build step DAG with topological execution and failure cascading.

The graph enforces:
- No step runs unless every step it depends on has PASSED.
- When a step fails, all transitive dependents are BLOCKED and never run.
- Unrelated branches keep running after a failure.

Steps are declared during the configuration pass and are read-only after
``run()`` starts.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

from gladius.models.steps import BuildStep, StepState

logger = logging.getLogger(__name__)


class CyclicDependencyError(ValueError):
    """Raised when the step graph contains a cycle."""


class UnknownStepError(KeyError):
    """Raised when a step id is not declared in the graph."""


class DuplicateStepError(ValueError):
    """Raised when a step id is declared twice."""


class StepExecutionError(RuntimeError):
    """Raised by ``run(fail_fast=True)`` or ``raise_for_failures()``."""

    def __init__(self, step_id: str, cause: BaseException | None = None) -> None:
        self.step_id = step_id
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Step '{step_id}' failed{detail}")


class StepGraph:
    """Directed acyclic graph of build steps, keyed by step id."""

    def __init__(self, steps: Iterable[BuildStep] = ()) -> None:
        self._steps: dict[str, BuildStep] = {}
        self.states: dict[str, StepState] = {}
        self.errors: dict[str, BaseException] = {}
        for step in steps:
            self.add(step)

    def add(self, step: BuildStep) -> BuildStep:
        """Declare a step. Dependencies may be declared later."""
        if step.step_id in self._steps:
            raise DuplicateStepError(f"Step '{step.step_id}' is already declared")
        self._steps[step.step_id] = step
        self.states[step.step_id] = StepState.NOT_STARTED
        return step

    # ------------------------------------------------------------------
    # Query methods
    # ------------------------------------------------------------------

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._steps

    def __len__(self) -> int:
        return len(self._steps)

    def get(self, step_id: str) -> BuildStep:
        try:
            return self._steps[step_id]
        except KeyError:
            raise UnknownStepError(step_id) from None

    def _dependents_map(self) -> dict[str, list[str]]:
        dependents: dict[str, list[str]] = {sid: [] for sid in self._steps}
        for step in self._steps.values():
            for dep in step.depends_on:
                if dep not in self._steps:
                    raise UnknownStepError(
                        f"Step '{step.step_id}' depends on undeclared step '{dep}'"
                    )
                dependents[dep].append(step.step_id)
        return dependents

    def get_dependents(self, step_id: str) -> list[str]:
        """Return all transitive dependents of a step (BFS order)."""
        dependents = self._dependents_map()
        result: list[str] = []
        queue = deque(dependents.get(step_id, []))
        visited: set[str] = set()
        while queue:
            node = queue.popleft()
            if node in visited:
                continue
            visited.add(node)
            result.append(node)
            queue.extend(dependents.get(node, []))
        return result

    def order(self) -> list[str]:
        """Return all step ids in topological order (declaration order breaks ties)."""
        dependents = self._dependents_map()
        position = {sid: i for i, sid in enumerate(self._steps)}
        in_degree = {sid: len(set(s.depends_on)) for sid, s in self._steps.items()}
        queue = deque(sid for sid, deg in in_degree.items() if deg == 0)
        result: list[str] = []

        while queue:
            node = queue.popleft()
            result.append(node)
            for dep in sorted(set(dependents[node]), key=position.__getitem__):
                in_degree[dep] -= 1
                if in_degree[dep] == 0:
                    queue.append(dep)

        if len(result) != len(self._steps):
            stuck = sorted(sid for sid, deg in in_degree.items() if deg > 0)
            raise CyclicDependencyError(
                f"Step graph has a cycle. Visited {len(result)}/{len(self._steps)} "
                f"steps; unresolved: {', '.join(stuck)}"
            )
        return result

    def closure(self, targets: Iterable[str]) -> set[str]:
        """Return *targets* plus everything they transitively depend on."""
        needed: set[str] = set()
        queue = deque(targets)
        while queue:
            step_id = queue.popleft()
            if step_id in needed:
                continue
            needed.add(step_id)
            queue.extend(self.get(step_id).depends_on)
        return needed

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def cascade_block(self, failed_step_id: str) -> list[str]:
        """Mark every not-yet-run transitive dependent as BLOCKED."""
        blocked: list[str] = []
        for step_id in self.get_dependents(failed_step_id):
            if self.states[step_id] == StepState.NOT_STARTED:
                self.states[step_id] = StepState.BLOCKED
                blocked.append(step_id)
        return blocked

    def run(
        self,
        targets: Iterable[str] | None = None,
        *,
        fail_fast: bool = False,
    ) -> dict[str, StepState]:
        """Execute steps in topological order and return their final states.

        With *targets*, only those steps and their dependencies run.
        With *fail_fast*, the first failure raises StepExecutionError.
        """
        selected = self.closure(targets) if targets is not None else None

        for step_id in self.order():
            if selected is not None and step_id not in selected:
                continue
            if self.states[step_id] != StepState.NOT_STARTED:
                continue

            step = self._steps[step_id]
            self.states[step_id] = StepState.RUNNING
            logger.debug("> %s", step_id)
            try:
                if step.action is not None:
                    step.action()
            except Exception as exc:
                self.states[step_id] = StepState.FAILED
                self.errors[step_id] = exc
                blocked = self.cascade_block(step_id)
                logger.error(
                    "Step %s failed: %s%s",
                    step_id,
                    exc,
                    f" (blocked: {', '.join(blocked)})" if blocked else "",
                )
                if fail_fast:
                    raise StepExecutionError(step_id, exc) from exc
                continue
            self.states[step_id] = StepState.PASSED

        return dict(self.states)

    def failed_steps(self) -> list[str]:
        return [sid for sid, state in self.states.items() if state == StepState.FAILED]

    def raise_for_failures(self) -> None:
        """Raise StepExecutionError for the first failed step, if any."""
        failed = self.failed_steps()
        if failed:
            raise StepExecutionError(failed[0], self.errors.get(failed[0]))
