"""Version parsing and bumping utilities.

Handles conversion between version strings and semver objects, with
special handling for incomplete version strings (e.g., "1.0" → "1.0.0").
"""

from __future__ import annotations

import semver

RELEASE_TYPES = ("major", "minor", "patch", "prerelease")


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Complete semver strings (including prerelease/build metadata) are parsed
    as-is. Incomplete versions are padded with zeros:
    - "1" → "1.0.0"
    - "1.2" → "1.2.0"

    Raises:
        ValueError: If the string is not a version.
    """
    if semver.Version.is_valid(version_str):
        return semver.Version.parse(version_str)
    parts = version_str.split(".")
    # Pad with zeros to ensure we have at least 3 parts
    while len(parts) < 3:
        parts.append("0")
    return semver.Version.parse(".".join(parts[:3]))


def is_version(version_str: str) -> bool:
    """Check whether parse_version() accepts the string."""
    try:
        parse_version(version_str)
    except ValueError:
        return False
    return True

def bump_version(
    version_str: str, release_type: str, prerelease_token: str = "rc"
) -> str:
    """Increment a version by a release type and return it as a string.

    Examples:
        bump_version("1.2.3", "minor") → "1.3.0"
        bump_version("1.2.3", "prerelease") → "1.2.4-rc.1"
        bump_version("1.3.0-rc.1", "patch") → "1.3.0"

    Raises:
        ValueError: If the version is malformed or the release type unknown.
    """
    if release_type not in RELEASE_TYPES:
        raise ValueError(
            f"Unknown release type {release_type!r}; expected one of {RELEASE_TYPES}"
        )
    version = parse_version(version_str)
    return str(version.next_version(release_type, prerelease_token=prerelease_token))
