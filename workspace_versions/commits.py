"""Conventional Commits classification.

Turns the raw output of :func:`workspace_versions.git.commits_since_ref` into
a release type for the workspace it was collected for.

    BREAKING CHANGE (or ``!``)  →  major
    feat:                       →  minor
    fix:, perf:                 →  patch
    docs:, chore:, ci:, etc.    →  no release
"""

from __future__ import annotations

import re

from .git import COMMIT_SEPARATOR, commits_since_ref

# Highest precedence first.
RELEASE_PRECEDENCE = ("major", "minor", "patch")

_HEADER_RE = re.compile(
    r"^(?P<type>[a-zA-Z]+)(?:\((?P<scope>[^)]*)\))?(?P<breaking>!)?:\s+\S"
)
_BREAKING_FOOTER_RE = re.compile(r"^BREAKING[ -]CHANGE:", re.MULTILINE)

_TYPE_RELEASES = {
    "feat": "minor",
    "fix": "patch",
    "perf": "patch",
}


def split_commit_messages(log: str) -> list[str]:
    """Split separator-delimited ``git log`` output into commit messages."""
    messages = (chunk.strip() for chunk in log.split(COMMIT_SEPARATOR))
    return [m for m in messages if m]


def classify_commit(message: str) -> str | None:
    """Return the release type a single commit message calls for.

    Returns None for non-conventional messages and for types that do not
    trigger a release.
    """
    match = _HEADER_RE.match(message.strip())
    if not match:
        return None
    if match.group("breaking") or _BREAKING_FOOTER_RE.search(message):
        return "major"
    return _TYPE_RELEASES.get(match.group("type").lower())


def release_type(messages: list[str]) -> str | None:
    """Return the strongest release type over all messages."""
    found = {classify_commit(m) for m in messages}
    for candidate in RELEASE_PRECEDENCE:
        if candidate in found:
            return candidate
    return None


async def analyze_commits_since_ref(ref: str, path: str) -> str | None:
    """Classify the commits in ``ref..HEAD`` that touch ``path``."""
    log = await commits_since_ref(ref, path)
    return release_type(split_commit_messages(log))
