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
# THE UPDATER - PINNED CHECKOUTS
# -----------------------------------------------------------------------------
# Responsibility: Bring <external_dir>/<name> to a pinned revision.
#
# - Existing git checkout: fetch all remotes, force-checkout the revision
#   (local modifications to tracked files are discarded)
# - Anything else at that path: delete it, clone fresh, checkout the revision
#
# Git failures propagate as GitError. Nothing is retried.
# -----------------------------------------------------------------------------

import shutil
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from depsync.infra.git_client import GitProvider

console = Console()

ACTION_CLONED = "cloned"
ACTION_UPDATED = "updated"


@dataclass
class RepoUpdate:
    """Outcome of one update_repo call."""

    name: str
    action: str
    revision: str
    head: str


def remove_entry(path: Path) -> None:
    """Delete whatever lives at path: symlink, file or directory tree."""
    path = Path(path)
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


class RepositoryUpdater:
    """Keeps dependency checkouts under one directory at pinned revisions."""

    def __init__(self, git: GitProvider, external_dir: Path) -> None:
        self._git = git
        self._external_dir = Path(external_dir)

    def update_repo(self, name: str, url: str, revision: str) -> RepoUpdate:
        """
        Update or clone a repository and check out a revision.

        Args:
            name: Directory name under the external directory
            url: Clone URL, used only when no checkout exists
            revision: Commit, tag or branch to check out

        Returns:
            RepoUpdate describing what happened and the resulting HEAD

        Raises:
            GitError: If any git operation fails
        """
        repo_path = self._external_dir / name

        if self._git.is_repository(repo_path) and not repo_path.is_symlink():
            self._git.fetch_all(repo_path)
            self._git.checkout(repo_path, revision, force=True)
            action = ACTION_UPDATED
        else:
            if repo_path.exists() or repo_path.is_symlink():
                console.print(
                    f"[yellow][UPDATER] Replacing non-git entry: {repo_path}[/yellow]"
                )
                remove_entry(repo_path)

            self._external_dir.mkdir(parents=True, exist_ok=True)
            self._git.clone(url, repo_path)
            self._git.checkout(repo_path, revision)
            action = ACTION_CLONED

        head = self._git.head_revision(repo_path)
        console.print(f"[green][UPDATER] {name} {action} at {head[:12]}[/green]")

        return RepoUpdate(name=name, action=action, revision=revision, head=head)
