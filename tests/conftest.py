"""Shared test fixtures."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest
import tomlkit

from workspace_versions.models import Workspace


def _write_package(root: Path, dirname: str, name: str, version: str) -> Path:
    package_dir = root / "packages" / dirname
    (package_dir / "src").mkdir(parents=True)
    (package_dir / "pyproject.toml").write_text(
        f'[project]\nname = "{name}"\nversion = "{version}"\n'
    )
    return package_dir


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Create a uv workspace with two packages: pkg-a 1.2.0 and pkg-b 2.0.0."""
    root = tmp_path / "repo"
    root.mkdir()
    (root / "pyproject.toml").write_text(
        '[tool.uv.workspace]\nmembers = ["packages/*"]\n'
    )
    _write_package(root, "pkg-a", "pkg-a", "1.2.0")
    _write_package(root, "pkg-b", "pkg_b", "2.0.0")
    return root


@pytest.fixture
def sample_toml_doc() -> tomlkit.TOMLDocument:
    """Create a sample root TOML document."""
    content = """\
[project]
name = "My_Package"
version = "2.0.0"

[tool.uv.workspace]
members = ["packages/*", "libs/*"]

[tool.workspace-versions]
default-branch = "main"
prerelease-token = "beta"
"""
    return tomlkit.parse(content)


@pytest.fixture
def sample_workspaces() -> list[Workspace]:
    """Two workspaces rooted at /repo."""
    return [
        Workspace(name="a", version="1.2.0", dir="/repo/pkg-a", path="pkg-a"),
        Workspace(name="b", version="2.0.0", dir="/repo/pkg-b", path="pkg-b"),
    ]


GitRunner = Callable[..., str]


@pytest.fixture
def git_repo(
    workspace_root: Path, monkeypatch: pytest.MonkeyPatch
) -> GitRunner:
    """Turn workspace_root into a git repo on master and chdir into it.

    Returns a helper that runs git synchronously in the repo.
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    monkeypatch.chdir(workspace_root)
    monkeypatch.setenv("HOME", str(workspace_root.parent))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for var in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
        monkeypatch.setenv(var, "Test User")
    for var in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
        monkeypatch.setenv(var, "test@example.com")

    def run_git(*args: str) -> str:
        result = subprocess.run(
            ["git", *args], capture_output=True, text=True, check=True
        )
        return result.stdout.strip()

    run_git("init", "-q")
    run_git("symbolic-ref", "HEAD", "refs/heads/master")
    run_git("config", "commit.gpgsign", "false")
    run_git("config", "tag.gpgsign", "false")
    run_git("add", "-A")
    run_git("commit", "-q", "-m", "chore: initial commit")
    return run_git


CommitFile = Callable[[str, str, str], None]


@pytest.fixture
def commit_file(git_repo: GitRunner) -> CommitFile:
    """Return a helper that writes a file, stages it and commits it."""

    def _commit(path: str, content: str, message: str) -> None:
        p = Path.cwd() / path
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content)
        git_repo("add", path)
        git_repo("commit", "-q", "-m", message)

    return _commit
