"""Gladius: deterministic build versioning and artifact assembly.

  - One version per build: ``<base>-SNAPSHOT`` locally,
    ``<base>-<build>.<commit>`` on CI
  - Commit identity read from the enclosing git repository
  - Sources, javadoc and tests archives alongside the primary archive
  - Deterministic, byte-reproducible zip output
"""

__version__ = "0.1.0"
__description__ = "Deterministic build versioning and artifact assembly"

from gladius.core.build import Build, BuildContext
from gladius.cli.app import app as cli

__all__ = ["Build", "BuildContext", "cli", "__version__"]
