"""TOML reading utilities.

Uses tomlkit to read the root and per-package pyproject.toml files that
describe a uv workspace and its settings.
"""

from __future__ import annotations

from pathlib import Path

import tomlkit
from packaging.utils import canonicalize_name

from .errors import WorkspaceError
from .models import VersionsConfig

CONFIG_TABLE = "workspace-versions"


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Parse the root or a member pyproject.toml for discovery and settings."""
    return tomlkit.parse(path.read_text())


def get_project_name(doc: tomlkit.TOMLDocument, fallback: str) -> str:
    """Return the workspace name used as release tag prefix.

    [project].name is PEP 503 normalized, so ``My_Pkg`` is tagged as
    ``my-pkg-<version>``. ``fallback`` (the directory name) covers members
    that declare no name.
    """
    return canonicalize_name(doc.get("project", {}).get("name", fallback))


def get_project_version(doc: tomlkit.TOMLDocument) -> str:
    """Return the version an untagged workspace is bumped from.

    Falls back to "0.0.0" when [project].version is unset.
    """
    return str(doc.get("project", {}).get("version", "0.0.0"))


def get_workspace_member_globs(doc: tomlkit.TOMLDocument) -> list[str]:
    """Extract workspace member glob patterns from [tool.uv.workspace].

    These patterns (e.g., "packages/*", "libs/*") define which directories
    contain workspace packages.

    Raises:
        WorkspaceError: If no workspace members are defined.
    """
    members = doc.get("tool", {}).get("uv", {}).get("workspace", {}).get("members")
    if not members:
        raise WorkspaceError(
            "No [tool.uv.workspace] members defined in root pyproject.toml"
        )
    return [str(m) for m in members]


def get_config(doc: tomlkit.TOMLDocument) -> VersionsConfig:
    """Read [tool.workspace-versions], falling back to defaults for missing keys."""
    table = doc.get("tool", {}).get(CONFIG_TABLE, {})
    return VersionsConfig.model_validate(table.unwrap() if table else {})


def load_config(root: Path | None = None) -> VersionsConfig:
    """Load settings from the root pyproject.toml, if there is one."""
    pyproject = (root or Path.cwd()) / "pyproject.toml"
    if not pyproject.exists():
        return VersionsConfig()
    return get_config(load_pyproject(pyproject))
