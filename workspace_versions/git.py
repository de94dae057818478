"""Read-only git queries used to plan workspace releases.

Every function here wraps a single git subcommand (or a short, fixed sequence
of them) and returns parsed text. Nothing in this module knows about
workspaces; the planner in :mod:`workspace_versions.workspaces` combines
these answers with the discovered packages.
"""

from __future__ import annotations

from pathlib import Path

from .errors import GitCommandError, MissingRefError
from .shell import git

# Scissors line appended after each commit body by commits_since_ref().
COMMIT_SEPARATOR = "------------------------ >8 ------------------------"


async def resolve_ref(name: str) -> str | None:
    """Resolve a ref (branch, tag or commit) to a commit hash.

    Returns None if the ref does not exist.
    """
    try:
        out = await git("rev-parse", name)
    except GitCommandError:
        return None
    return out.splitlines()[0].strip() if out else None


async def default_branch_ref(branch: str = "master") -> str | None:
    """Resolve the default branch to a commit hash, or None if it is absent."""
    return await resolve_ref(branch)


async def latest_tag() -> str | None:
    """Return the most recent tag reachable from HEAD, or None if there is none."""
    try:
        out = await git("describe", "--tags", "--abbrev=0")
    except GitCommandError:
        return None
    return out.splitlines()[0].strip() if out else None


async def changed_files_since_ref(ref: str | None, full_path: bool = False) -> list[str]:
    """List files that differ between the working tree and where HEAD left ``ref``.

    The comparison base is ``git merge-base <ref> HEAD``, so commits made on
    ``ref`` after the branch point are not reported as changes.

    Args:
        ref: Ref to compare against.
        full_path: If True, return absolute paths instead of paths relative
                   to the repository root.

    Raises:
        MissingRefError: If ``ref`` is None.
    """
    if ref is None:
        raise MissingRefError("Cannot list changed files: ref is undefined")

    diverged_at = await git("merge-base", ref, "HEAD")
    # Unquoted so non-ASCII names stay usable as paths.
    files = (
        await git("-c", "core.quotePath=false", "diff", "--name-only", diverged_at)
    ).splitlines()
    if not full_path:
        return files
    cwd = Path.cwd()
    return [str(cwd / f) for f in files]


async def changed_files_since_default_branch(
    branch: str = "master", full_path: bool = False
) -> list[str]:
    """Shortcut for changed_files_since_ref() against the default branch."""
    ref = await default_branch_ref(branch)
    return await changed_files_since_ref(ref, full_path)


async def commits_since_ref(ref: str, path: str) -> str:
    """Return the bodies of commits in ``ref..HEAD`` that touch ``path``.

    Each body is followed by a COMMIT_SEPARATOR line so the output can be
    split back into individual messages.
    """
    return await git(
        "log",
        f"{ref}..HEAD",
        f"--format=%B%n{COMMIT_SEPARATOR}",
        "--",
        path,
    )


async def first_commit_in_path(path: str) -> str | None:
    """Return the hash of the oldest commit that touched ``path``."""
    out = await git("log", "--reverse", "--pretty=format:%H", "--", path)
    return out.splitlines()[0].strip() if out else None


async def list_tags(newest_first: bool = False) -> list[str]:
    """List all tags, optionally sorted by ref name in descending order."""
    args = ["tag"]
    if newest_first:
        args.append("--sort=-refname")
    return [tag.strip() for tag in (await git(*args)).splitlines()]


async def is_ancestor(ref: str) -> bool:
    """Check whether ``ref`` is reachable from HEAD.

    git reports "not an ancestor" with exit status 1; any other failure
    (e.g., an unknown ref) is re-raised.
    """
    try:
        await git("merge-base", "--is-ancestor", ref, "HEAD")
    except GitCommandError as exc:
        if exc.returncode == 1:
            return False
        raise
    return True


async def first_ancestor_tag(tags: list[str]) -> str | None:
    """Return the first tag, in the given order, that is an ancestor of HEAD.

    Tags are checked one at a time and the scan stops at the first match,
    so the caller's ordering decides which tag wins.
    """
    for tag in tags:
        if await is_ancestor(tag):
            return tag
    return None


async def create_tag(name: str, message: str | None = None, ref: str = "HEAD") -> None:
    """Create an annotated tag, using the tag name as message by default."""
    await git("tag", "-a", name, "-m", message or name, ref)


async def push_tags() -> None:
    """Push all local tags to origin."""
    await git("push", "origin", "--tags")
