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
# DOMAIN MODELS - DEPENDENCY RECORDS
# -----------------------------------------------------------------------------
# These Pydantic models describe what the Synchronizer works on:
# - RepoEntry: one declarative row of the fixed dependency list
# - RepoSpec: the per-run resolution of a RepoEntry (clone or symlink)
# - BuildTarget: a CMake project directory to configure and build
# - SyncConfig: the record produced by the command line parser
#
# Invalid combinations (e.g. both a URL and an override) are rejected here,
# before any git or filesystem operation begins.
# -----------------------------------------------------------------------------

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from depsync.domain.config import read_revision

REPO_NAME_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9_.-]*$"


class ScriptStep(BaseModel):
    """
    A post-fetch hook: one vendored script run inside a fetched repository.

    `workdir` is relative to the repository root and `script` is relative to
    `workdir`. When `interpreter` is set the script is passed to it (e.g.
    python) instead of being executed directly.
    """

    script: str = Field(..., min_length=1, description="Script path relative to workdir")
    args: list[str] = Field(default_factory=list)
    workdir: str = Field(".", description="Repo-relative directory to run in")
    interpreter: str | None = None


class SyncConfig(BaseModel):
    """Configuration record produced by the argument parser."""

    v_headers_root: Path | None = None
    spirv_cross_root: Path | None = None
    glslang_root: Path | None = None
    verbose: bool = False

    def override_for(self, key: str | None) -> Path | None:
        """Return the override path stored under key, if any."""
        if key is None:
            return None
        return getattr(self, key)


class RepoSpec(BaseModel):
    """
    A repository resolved for one run.

    Exactly one source is active: either url + pinned_revision (clone from
    upstream) or local_override_path (symlink to a caller-provided checkout).
    """

    name: str = Field(..., pattern=REPO_NAME_PATTERN)
    url: str | None = None
    pinned_revision: str | None = None
    local_override_path: Path | None = None

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "RepoSpec":
        cloning = self.url is not None
        linking = self.local_override_path is not None

        if cloning == linking:
            raise ValueError(
                f"{self.name}: exactly one of url or local_override_path must be set"
            )
        if cloning and not self.pinned_revision:
            raise ValueError(f"{self.name}: a pinned revision is required when cloning")
        return self

    @property
    def is_override(self) -> bool:
        return self.local_override_path is not None


class RepoEntry(BaseModel):
    """
    One row of the fixed dependency list.

    Per-repo exceptions are expressed as optional fields rather than
    dedicated code paths:
    - override_key: SyncConfig field that may redirect this repo to a local path
    - post_fetch: code generation hooks run after a successful fetch
    - sub_builds: repo-relative CMake trees built after the hooks
    """

    name: str = Field(..., pattern=REPO_NAME_PATTERN)
    url: str = Field(..., min_length=1)
    override_key: str | None = None
    post_fetch: list[ScriptStep] = Field(default_factory=list)
    sub_builds: list[str] = Field(default_factory=list)

    class Config:
        """Pydantic configuration for strict validation."""

        frozen = True

    def resolve(self, config: SyncConfig, revisions_dir: Path) -> RepoSpec:
        """
        Build the RepoSpec for this run.

        The revision file is only read when the repo is actually fetched.

        Raises:
            RevisionFileError: If the repo is fetched and its revision file is unusable.
        """
        override = config.override_for(self.override_key)
        if override is not None:
            return RepoSpec(name=self.name, local_override_path=override)

        return RepoSpec(
            name=self.name,
            url=self.url,
            pinned_revision=read_revision(revisions_dir, self.name),
        )


class BuildTarget(BaseModel):
    """A CMake project: source tree, build tree and install prefix."""

    source_dir: Path
    build_dir: Path | None = None
    install_prefix: str = "install"

    @model_validator(mode="after")
    def _default_build_dir(self) -> "BuildTarget":
        if self.build_dir is None:
            self.build_dir = self.source_dir / "build"
        return self
