"""Data models for workspace-versions.

These Pydantic models represent the workspaces, filters and settings that
flow through the version planner.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Workspace(BaseModel):
    """A single package in the monorepo workspace.

    Attributes:
        name: Canonical (PEP 503) package name from [project].name.
        version: Current version string from pyproject.toml.
        dir: Absolute path to the package directory.
        path: Path to the package directory relative to the project root.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    dir: str
    path: str


class WorkspaceFilter(BaseModel):
    """Include/exclude patterns applied to discovered workspaces.

    Name patterns are matched against the canonical package name, filesystem
    patterns against the workspace path relative to the project root. All
    patterns use shell-style globbing (e.g., "pkg-*", "packages/libs/*").
    """

    only: str | None = None
    ignore: str | None = None
    only_fs: str | None = None
    ignore_fs: str | None = None


class VersionsConfig(BaseModel):
    """Settings from the [tool.workspace-versions] table of the root pyproject.toml."""

    model_config = ConfigDict(populate_by_name=True)

    default_branch: str = Field(default="master", alias="default-branch")
    prerelease_token: str = Field(default="rc", alias="prerelease-token")
    tag_separator: str = Field(default="-", alias="tag-separator")
