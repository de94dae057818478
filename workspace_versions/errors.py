"""Exceptions raised by workspace-versions.

Only two git failures are ever tolerated (a missing ref when resolving, and
"not an ancestor" when checking ancestry). Everything else surfaces as one of
these exceptions and is left for the caller to handle.
"""

from __future__ import annotations

import subprocess


class GitCommandError(subprocess.CalledProcessError):
    """A git subprocess exited with a non-zero status."""

    def __str__(self) -> str:
        cmd = " ".join(self.cmd)
        detail = f": {self.stderr}" if self.stderr else ""
        return f"'{cmd}' exited with status {self.returncode}{detail}"


class MissingRefError(ValueError):
    """A diff or log was requested against a ref that does not exist."""


class WorkspaceError(RuntimeError):
    """The monorepo workspace layout could not be read."""
