"""Workspace version planner: changed workspaces and next release versions.

Combines git answers with the discovered workspaces:
1. Map changed files to the workspaces that own them
2. Collect per-workspace changes since the last release tag
3. Classify each workspace's commits since its last tag and bump its version

Release tags have the form ``<name>-<version>``. A workspace that has never
been tagged is versioned from its first commit and its recorded version.
"""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePath

from .commits import analyze_commits_since_ref
from .discovery import discover_workspaces, filter_workspaces
from .errors import MissingRefError
from .git import (
    changed_files_since_ref,
    default_branch_ref,
    first_ancestor_tag,
    first_commit_in_path,
    list_tags,
)
from .models import VersionsConfig, Workspace, WorkspaceFilter
from .shell import step
from .toml import load_config
from .versions import bump_version, is_version


def list_workspaces(opts: WorkspaceFilter | None = None) -> list[Workspace]:
    """Discover the workspaces under the current directory and apply ``opts``."""
    workspaces = discover_workspaces(Path.cwd())
    if opts is None:
        return workspaces
    return filter_workspaces(workspaces, opts)


def map_file_to_workspace(file: str, workspaces: list[Workspace]) -> Workspace | None:
    """Return the first workspace whose directory contains ``file``.

    Paths are compared component-wise, so ``/repo/pkg-a`` does not own
    ``/repo/pkg-ab/x.py`` and trailing separators are irrelevant.
    """
    path = PurePath(file)
    for ws in workspaces:
        if path.is_relative_to(ws.dir):
            return ws
    return None


def file_in_workspace(file: str, workspaces: list[Workspace]) -> bool:
    """Check whether any workspace owns ``file``."""
    return map_file_to_workspace(file, workspaces) is not None


async def workspaces_changed_since_ref(
    ref: str | None, opts: WorkspaceFilter | None = None
) -> list[Workspace]:
    """Return the workspaces with changes since ``ref``, in first-seen order.

    Files outside every workspace (root files, or files of packages that were
    removed) are ignored. Each workspace appears at most once.

    Raises:
        MissingRefError: If ``ref`` is None.
    """
    changed_files = await changed_files_since_ref(ref, full_path=True)
    workspaces = list_workspaces(opts)

    changed: dict[str, Workspace] = {}
    for file in changed_files:
        ws = map_file_to_workspace(file, workspaces)
        if ws is not None and ws.dir not in changed:
            changed[ws.dir] = ws
    return list(changed.values())


async def workspaces_changed_since_default_branch(
    opts: WorkspaceFilter | None = None, config: VersionsConfig | None = None
) -> list[Workspace]:
    """workspaces_changed_since_ref() against the configured default branch.

    Raises:
        MissingRefError: If the default branch does not exist.
    """
    config = config or load_config()
    ref = await default_branch_ref(config.default_branch)
    return await workspaces_changed_since_ref(ref, opts)


async def changes_since_last_tag_by_workspace(
    opts: WorkspaceFilter | None = None,
) -> dict[str, list[str]]:
    """Group the files changed since the last release tag by workspace.

    The reference is the newest tag (by descending ref name) that is an
    ancestor of HEAD.

    Returns:
        Map of workspace directory → basenames of its changed files. Every
        workspace has an entry; unchanged ones map to an empty list.

    Raises:
        MissingRefError: If no tag is an ancestor of HEAD.
    """
    step("Collecting changes since last tag")

    tags = await list_tags(newest_first=True)
    tag = await first_ancestor_tag(tags)
    print(f"  last tag: {tag or '<none>'}")
    changed_files = await changed_files_since_ref(tag, full_path=True)
    workspaces = list_workspaces(opts)

    changes: dict[str, list[str]] = {}
    for ws in workspaces:
        changes[ws.dir] = [
            PurePath(f).name for f in changed_files if PurePath(f).is_relative_to(ws.dir)
        ]
        print(f"  {ws.name}: {len(changes[ws.dir])} changed files")
    return changes


def workspace_tags(tags: list[str], name: str, separator: str = "-") -> list[str]:
    """Keep the tags that are releases of workspace ``name``, in order.

    A tag qualifies when it is ``<name><separator><version>``. Checking the
    version part keeps ``pkg`` from claiming ``pkg-a-1.2.0``.
    """
    prefix = f"{name}{separator}"
    return [
        t for t in tags if t.startswith(prefix) and is_version(t.removeprefix(prefix))
    ]


async def next_version_for_workspace(
    tags: list[str], workspace: Workspace, config: VersionsConfig | None = None
) -> dict[str, str | None]:
    """Compute the next version of one workspace.

    Args:
        tags: This workspace's release tags, newest first.
        workspace: The workspace to version.
        config: Project settings; defaults are used when omitted.

    Returns:
        Single-entry map of workspace name → next version, or None when no
        commit since the reference calls for a release.

    Raises:
        MissingRefError: If the workspace has no history, or none of its
            tags is an ancestor of HEAD.
        ValueError: If the current version is malformed.
    """
    config = config or VersionsConfig()
    name = workspace.name

    if not tags:
        ref = await first_commit_in_path(workspace.path)
        if ref is None:
            raise MissingRefError(f"No commits found under {workspace.path}")
        current = workspace.version
    else:
        ref = await first_ancestor_tag(tags)
        if ref is None:
            raise MissingRefError(f"No tag of {name} is an ancestor of HEAD")
        current = ref.removeprefix(f"{name}{config.tag_separator}")

    release = await analyze_commits_since_ref(ref, workspace.path)
    if release is None:
        print(f"  {name}: {current} (no release since {ref})")
        return {name: None}

    next_version = bump_version(current, release, config.prerelease_token)
    print(f"  {name}: {current} → {next_version} ({release})")
    return {name: next_version}


async def next_versions_for_workspaces(
    workspaces: list[Workspace], config: VersionsConfig | None = None
) -> list[dict[str, str | None]]:
    """Compute next versions for all workspaces concurrently.

    Tags are listed once; each workspace only considers its own release
    tags (see workspace_tags()). The first failure aborts the whole batch.

    Returns:
        One single-entry map per workspace, in the order given.
    """
    step("Computing next versions")

    config = config or load_config()
    tags = await list_tags(newest_first=True)

    return list(
        await asyncio.gather(
            *(
                next_version_for_workspace(
                    workspace_tags(tags, ws.name, config.tag_separator),
                    ws,
                    config,
                )
                for ws in workspaces
            )
        )
    )
