"""Project and module declarations.

Loaded from ``gladius.toml`` or the ``[tool.gladius]`` table of
``pyproject.toml``. A minimal declaration::

    name = "jcpi"
    description = "Java Chess Protocol Interface"
    group = "com.fluxchess.jcpi"
    version = "2.0.0"
    module_name = "com.fluxchess.jcpi"

    [[modules]]
    name = "jcpi"
    path = "."

Omitting ``modules`` declares a single root module named after the project.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class ProjectConfigError(ValueError):
    """Raised when a project declaration is missing or malformed."""


class ModuleSpec(BaseModel):
    """Layout of a single module, relative to its own directory."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path = Path(".")
    compiled: bool = True  # False for aggregate modules with no compile step
    source_dirs: tuple[Path, ...] = (
        Path("src/main/java"),
        Path("src/main/resources"),
    )
    classes_dir: Path = Path("build/classes/java/main")
    test_classes_dir: Path = Path("build/classes/java/test")
    docs_dir: Path = Path("build/docs/javadoc")


class ProjectSpec(BaseModel):
    """Statically declared project information."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str = Field(min_length=1)  # base version, before any suffix
    description: str = ""
    group: str = ""
    module_name: str = ""
    root: Path = Path(".")
    modules: tuple[ModuleSpec, ...] = ()
    dist_files: tuple[Path, ...] = (
        Path("README.md"),
        Path("LICENSE"),
        Path("NOTICE"),
    )
    dist_extras: tuple[Path, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _default_root_module(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("modules") and data.get("name"):
            data = {**data, "modules": [{"name": data["name"]}]}
        return data

    @model_validator(mode="after")
    def _unique_module_names(self) -> ProjectSpec:
        names = [m.name for m in self.modules]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate module names: {names}")
        return self

    def module_dir(self, module: ModuleSpec) -> Path:
        """Absolute-or-root-relative directory of a module."""
        return self.root / module.path


def _read_table(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError:
        raise ProjectConfigError(f"Project file not found: {path}") from None
    except tomllib.TOMLDecodeError as exc:
        raise ProjectConfigError(f"Invalid TOML in {path}: {exc}") from exc

    if path.name == "pyproject.toml":
        table = data.get("tool", {}).get("gladius")
        if table is None:
            raise ProjectConfigError(f"No [tool.gladius] table in {path}")
        return table
    return data


def load_project(path: Path) -> ProjectSpec:
    """Load a ProjectSpec from a TOML file; ``root`` is the file's directory."""
    path = Path(path)
    table = dict(_read_table(path))
    table.setdefault("root", path.parent)
    try:
        return ProjectSpec.model_validate(table)
    except ValidationError as exc:
        raise ProjectConfigError(f"Invalid project declaration in {path}:\n{exc}") from exc
