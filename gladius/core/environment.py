"""CI environment detection.

CI is signalled by the mere presence of a variable (``CI`` by default), not
by its value. Under CI the build number is read from a second variable and
defaults to the empty string. Neither absence is an error.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from gladius.models.versioning import BuildEnvironment


class EnvironmentProbe:
    """Reads the process environment to answer "are we on CI, and which build?".

    Parameters
    ----------
    ci_var:
        Variable whose presence marks a CI build.
    build_number_var:
        Variable carrying the CI-assigned build number.
    """

    def __init__(
        self,
        ci_var: str = "CI",
        build_number_var: str = "CIRCLE_BUILD_NUM",
    ) -> None:
        self.ci_var = ci_var
        self.build_number_var = build_number_var

    def detect(self, environ: Mapping[str, str] | None = None) -> BuildEnvironment:
        """Return the BuildEnvironment for *environ* (``os.environ`` by default)."""
        env = os.environ if environ is None else environ
        if self.ci_var not in env:
            return BuildEnvironment(is_ci=False, build_number="")
        return BuildEnvironment(is_ci=True, build_number=env.get(self.build_number_var, ""))
