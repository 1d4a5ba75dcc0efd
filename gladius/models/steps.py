"""Build step models — states and step declarations."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel, ConfigDict


class StepState(str, Enum):
    """Execution state of a build step."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    BLOCKED = "blocked"  # an upstream step failed; this one never ran


class BuildStep(BaseModel):
    """A named unit of build work.

    ``depends_on`` lists step ids that must pass before this step runs.
    A step without an action is a pure ordering node.
    """

    model_config = ConfigDict(frozen=True)

    step_id: str
    description: str = ""
    depends_on: tuple[str, ...] = ()
    action: Callable[[], None] | None = None

    @property
    def module(self) -> str:
        """Module prefix of a ``module:step`` id, or ``""`` for root steps."""
        module, sep, _ = self.step_id.rpartition(":")
        return module if sep else ""
