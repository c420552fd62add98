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
# THE DEPENDENCY SYNCHRONIZER - PIPELINE
# -----------------------------------------------------------------------------
# Orchestrates one run, strictly in order:
#
#   for each RepoEntry (manifest order):
#       override set?  -> symlink (no hooks, no sub-builds)
#       otherwise      -> update/clone at pinned revision
#                         -> post-fetch hooks -> sub-builds
#   aggregate xcodebuild
#
# Fail fast: the first error stops the run and is re-raised as SyncError
# naming the repository and step. Partial state stays on disk.
# -----------------------------------------------------------------------------

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from depsync.core.aggregate import AggregateBuilder, AggregateBuildError
from depsync.core.builder import BuildError, SubBuilder
from depsync.core.codegen import CodegenError, run_post_fetch
from depsync.core.manifest import DEFAULT_REPOSITORIES
from depsync.core.overrides import link_override
from depsync.core.updater import RepositoryUpdater
from depsync.domain.config import ConfigError, SyncSettings
from depsync.domain.models import RepoEntry, SyncConfig
from depsync.infra.git_client import GitError, GitProvider
from depsync.infra.process import ProcessRunner

console = Console()

ACTION_LINKED = "linked"

STEP_RESOLVE = "resolve"
STEP_FETCH = "fetch"
STEP_LINK = "link"
STEP_CODEGEN = "codegen"
STEP_SUB_BUILD = "sub-build"
STEP_AGGREGATE = "aggregate-build"


class SyncError(Exception):
    """Raised when any step of the pipeline fails."""

    def __init__(self, message: str, repo: str | None, step: str) -> None:
        super().__init__(message)
        self.repo = repo
        self.step = step


@dataclass
class RepoOutcome:
    """What the run did with one repository."""

    name: str
    action: str
    head: str | None = None
    source: str | None = None
    sub_builds: list[str] = field(default_factory=list)


@dataclass
class SyncReport:
    """Summary returned by DependencySynchronizer.run()."""

    repos: list[RepoOutcome] = field(default_factory=list)
    aggregate_built: bool = False


class DependencySynchronizer:
    """
    Brings every managed dependency to its pinned state, then builds them.

    Collaborators can be injected for testing; by default they are built
    from the settings and a ProcessRunner honoring config.verbose.
    """

    def __init__(
        self,
        config: SyncConfig,
        settings: SyncSettings,
        root: Path,
        entries: list[RepoEntry] | None = None,
        runner: ProcessRunner | None = None,
        git: GitProvider | None = None,
        sub_builder: SubBuilder | None = None,
        aggregate: AggregateBuilder | None = None,
    ) -> None:
        self._config = config
        self._settings = settings
        self._root = Path(root)
        self._entries = list(DEFAULT_REPOSITORIES if entries is None else entries)
        self._runner = runner or ProcessRunner(verbose=config.verbose)

        self._external_dir = settings.external_path(self._root)
        self._revisions_dir = settings.revisions_path(self._root)

        git = git or GitProvider(self._runner, timeout=settings.git_timeout)
        self._updater = RepositoryUpdater(git, self._external_dir)
        self._sub_builder = sub_builder or SubBuilder(self._runner)
        self._aggregate = aggregate or AggregateBuilder(self._runner, settings, self._root)

    @property
    def external_dir(self) -> Path:
        return self._external_dir

    def run(self) -> SyncReport:
        """
        Execute the full pipeline.

        Returns:
            SyncReport listing every repository's outcome

        Raises:
            SyncError: On the first failing step
        """
        report = SyncReport()
        console.print(f"[cyan][SYNC] External dependencies: {self._external_dir}[/cyan]")

        for entry in self._entries:
            console.rule(f"[bold]{entry.name}[/bold]")
            report.repos.append(self._sync_repo(entry))

        if self._settings.skip_aggregate_build:
            console.print("[yellow][SYNC] Aggregate build skipped (settings)[/yellow]")
        else:
            console.rule("[bold]Building dependencies[/bold]")
            try:
                self._aggregate.build(verbose=self._config.verbose)
            except AggregateBuildError as e:
                raise SyncError(f"Aggregate build failed: {e}", None, STEP_AGGREGATE) from e
            report.aggregate_built = True

        console.print("[green][SYNC] All dependencies synchronized[/green]")
        return report

    def _sync_repo(self, entry: RepoEntry) -> RepoOutcome:
        try:
            spec = entry.resolve(self._config, self._revisions_dir)
        except (ConfigError, ValidationError) as e:
            raise SyncError(f"{entry.name}: {e}", entry.name, STEP_RESOLVE) from e

        if spec.is_override:
            try:
                link_override(self._external_dir, spec.name, spec.local_override_path)
            except OSError as e:
                raise SyncError(f"{entry.name}: cannot create link: {e}", entry.name, STEP_LINK) from e
            return RepoOutcome(
                name=spec.name, action=ACTION_LINKED, source=str(spec.local_override_path)
            )

        try:
            update = self._updater.update_repo(spec.name, spec.url, spec.pinned_revision)
        except (GitError, OSError) as e:
            raise SyncError(f"{entry.name}: {e}", entry.name, STEP_FETCH) from e

        repo_path = self._external_dir / spec.name

        try:
            run_post_fetch(self._runner, repo_path, entry.post_fetch)
        except CodegenError as e:
            raise SyncError(f"{entry.name}: {e}", entry.name, STEP_CODEGEN) from e

        built = []
        for sub_dir in entry.sub_builds:
            try:
                self._sub_builder.build_repo(repo_path / sub_dir)
            except BuildError as e:
                raise SyncError(f"{entry.name}: {e}", entry.name, STEP_SUB_BUILD) from e
            built.append(sub_dir)

        return RepoOutcome(
            name=spec.name,
            action=update.action,
            head=update.head,
            source=spec.url,
            sub_builds=built,
        )
