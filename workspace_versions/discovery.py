"""Workspace discovery: find and filter the packages of a uv monorepo."""

from __future__ import annotations

import glob
from fnmatch import fnmatchcase
from pathlib import Path

from .errors import WorkspaceError
from .models import Workspace, WorkspaceFilter
from .toml import (
    get_project_name,
    get_project_version,
    get_workspace_member_globs,
    load_pyproject,
)


def discover_workspaces(root: Path | None = None) -> list[Workspace]:
    """Scan the project and discover all workspace packages.

    Reads [tool.uv.workspace].members from the root pyproject.toml to find
    package directories, then extracts name and version from each package's
    pyproject.toml.

    Args:
        root: Project root. Defaults to the current working directory.

    Returns:
        Workspaces in member-glob order (matches of each glob sorted).

    Raises:
        WorkspaceError: If no members are declared or none exist on disk.
    """
    root = root or Path.cwd()
    root_doc = load_pyproject(root / "pyproject.toml")
    member_globs = get_workspace_member_globs(root_doc)

    # Expand globs to find all package directories
    member_dirs: list[Path] = []
    for pattern in member_globs:
        for match in sorted(glob.glob(str(root / pattern))):
            p = Path(match)
            if (p / "pyproject.toml").exists() and p not in member_dirs:
                member_dirs.append(p)

    if not member_dirs:
        raise WorkspaceError("No packages found matching workspace members")

    workspaces: list[Workspace] = []
    for d in member_dirs:
        doc = load_pyproject(d / "pyproject.toml")
        workspaces.append(
            Workspace(
                name=get_project_name(doc, d.name),
                version=get_project_version(doc),
                dir=str(d),
                path=d.relative_to(root).as_posix(),
            )
        )
    return workspaces


def filter_workspaces(
    workspaces: list[Workspace], opts: WorkspaceFilter
) -> list[Workspace]:
    """Apply include/exclude patterns, preserving discovery order.

    A workspace is kept when it matches ``only`` and ``only_fs`` (if set)
    and matches neither ``ignore`` nor ``ignore_fs``.
    """
    kept: list[Workspace] = []
    for ws in workspaces:
        if opts.only and not fnmatchcase(ws.name, opts.only):
            continue
        if opts.ignore and fnmatchcase(ws.name, opts.ignore):
            continue
        if opts.only_fs and not fnmatchcase(ws.path, opts.only_fs):
            continue
        if opts.ignore_fs and fnmatchcase(ws.path, opts.ignore_fs):
            continue
        kept.append(ws)
    return kept
