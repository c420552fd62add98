"""
Pytest configuration and fixtures for depsync tests.
"""

import os
import shutil
import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from depsync.infra.process import ProcessResult

# Keep the developer's environment out of settings loading
for _var in ("DEPSYNC_ROOT", "DEPSYNC_CONFIG", "DEPSYNC_SKIP_AGGREGATE_BUILD"):
    os.environ.pop(_var, None)

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")

GIT_IDENTITY = [
    "-c", "user.name=depsync tests",
    "-c", "user.email=tests@depsync.invalid",
    "-c", "commit.gpgsign=false",
    "-c", "init.defaultBranch=main",
]


def git(cwd: Path, *args: str) -> str:
    """Run git for test setup and return stripped stdout."""
    result = subprocess.run(
        ["git", *GIT_IDENTITY, *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


def commit_file(repo: Path, name: str, content: str) -> str:
    """Write a file, commit it and return the new commit hash."""
    (repo / name).write_text(content)
    git(repo, "add", name)
    git(repo, "commit", "-q", "-m", f"update {name}")
    return git(repo, "rev-parse", "HEAD")


@pytest.fixture
def upstream_repo(tmp_path):
    """A local 'remote' repository with two commits: (path, [first, second])."""
    repo = tmp_path / "upstream"
    repo.mkdir()
    git(repo, "init", "-q")
    first = commit_file(repo, "README.md", "first\n")
    second = commit_file(repo, "README.md", "second\n")
    return repo, [first, second]


@pytest.fixture
def project_root(tmp_path):
    """Project root with an empty ExternalRevisions directory."""
    root = tmp_path / "project"
    (root / "ExternalRevisions").mkdir(parents=True)
    return root


@pytest.fixture
def write_revision(project_root):
    """Write <repo>_repo_revision into the project's revisions directory."""

    def _write(name: str, revision: str) -> Path:
        path = project_root / "ExternalRevisions" / f"{name}_repo_revision"
        path.write_text(f"{revision}\n")
        return path

    return _write


@pytest.fixture
def mock_runner():
    """ProcessRunner stand-in that succeeds for every command."""
    runner = MagicMock()

    def _run(args, cwd, **kwargs):
        return ProcessResult(args=list(args), returncode=0, cwd=Path(cwd), stdout="")

    runner.run.side_effect = _run
    return runner
