# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# GIT INFRASTRUCTURE - Checkout Management
# -----------------------------------------------------------------------------
# Responsibility: Execute the git operations needed to keep a dependency
# checkout at a pinned revision.
#
# Uses the git CLI directly through ProcessRunner. Every operation names the
# repository path explicitly.
# -----------------------------------------------------------------------------

from pathlib import Path

from rich.console import Console

from depsync.infra.process import ProcessError, ProcessResult, ProcessRunner

console = Console()

# Keeps "You are in 'detached HEAD' state" noise out of captured output
GIT_CONFIG_ARGS = ["-c", "advice.detachedHead=false"]


class GitError(Exception):
    """Raised when a Git operation fails."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class GitProvider:
    """
    Git operations wrapper for dependency checkouts.

    Holds no repository state of its own. Callers pass the checkout path
    to every method.
    """

    def __init__(self, runner: ProcessRunner, timeout: float | None = None) -> None:
        """
        Args:
            runner: Process runner used for every git invocation.
            timeout: Per-command timeout in seconds (None = no limit).
        """
        self._runner = runner
        self._timeout = timeout

    def _run(self, args: list[str], cwd: Path) -> ProcessResult:
        """
        Run a git subcommand.

        Raises:
            GitError: If the command fails or git cannot be launched
        """
        cmd = ["git", *GIT_CONFIG_ARGS, *args]
        try:
            return self._runner.run(cmd, cwd=cwd, timeout=self._timeout)
        except ProcessError as e:
            detail = e.output or str(e)
            raise GitError(f"git {args[0]} failed: {detail}", output=e.output) from e

    @staticmethod
    def is_repository(path: Path) -> bool:
        """True when path is a directory holding a .git entry."""
        path = Path(path)
        return path.is_dir() and (path / ".git").exists()

    def fetch_all(self, repo_path: Path) -> None:
        """Fetch updates from every remote."""
        console.print(f"[cyan][GIT] Fetching updates: {Path(repo_path).name}[/cyan]")
        self._run(["fetch", "--all"], cwd=repo_path)

    def clone(self, url: str, dest: Path) -> None:
        """Clone url into dest. The parent of dest must exist."""
        dest = Path(dest)
        console.print(f"[cyan][GIT] Cloning {url} -> {dest.name}[/cyan]")
        self._run(["clone", url, dest.name], cwd=dest.parent)

    def checkout(self, repo_path: Path, revision: str, force: bool = False) -> None:
        """
        Check out a revision.

        Args:
            repo_path: Checkout to operate on
            revision: Commit, tag or branch
            force: Discard local modifications to tracked files
        """
        args = ["checkout"]
        if force:
            args.append("--force")
        args.append(revision)

        console.print(f"[cyan][GIT] Checking out {revision}[/cyan]")
        self._run(args, cwd=repo_path)

    def head_revision(self, repo_path: Path) -> str:
        """Return the full commit hash of HEAD."""
        result = self._run(["rev-parse", "HEAD"], cwd=repo_path)
        return result.stdout.strip()
