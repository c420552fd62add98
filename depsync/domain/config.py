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
# SETTINGS - PROJECT LAYOUT & REVISION FILES
# -----------------------------------------------------------------------------
# Responsibility: Load the optional depsync.yaml and environment overrides,
# and read the pinned revision of each managed repository.
#
# Missing config file -> defaults. Broken config file -> ConfigError.
# -----------------------------------------------------------------------------

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError
from rich.console import Console

console = Console()

CONFIG_FILENAME = "depsync.yaml"
REVISION_FILE_SUFFIX = "_repo_revision"


class ConfigError(Exception):
    """Raised when the settings file or environment is invalid."""

    pass


class RevisionFileError(ConfigError):
    """Raised when a pinned revision file is missing or empty."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class SyncSettings(BaseModel):
    """
    Project layout and build settings.

    Relative paths are interpreted against the project root; use the
    *_path() helpers to get absolute locations.
    """

    external_dir: Path = Path("External")
    revisions_dir: Path = Path("ExternalRevisions")
    xcode_project: str = "ExternalDependencies.xcodeproj"
    xcode_scheme: str = "ExternalDependencies"
    xcode_configuration: str = "Release"
    derived_data_dir: Path = Path("External/build")
    skip_aggregate_build: bool = False
    git_timeout: float | None = None

    def external_path(self, root: Path) -> Path:
        return root / self.external_dir

    def revisions_path(self, root: Path) -> Path:
        return root / self.revisions_dir

    def derived_data_path(self, root: Path) -> Path:
        return root / self.derived_data_dir


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes")


def resolve_root() -> Path:
    """Project root: $DEPSYNC_ROOT, or the current directory."""
    return Path(os.getenv("DEPSYNC_ROOT") or Path.cwd()).resolve()


def load_settings(root: Path, config_path: Path | None = None) -> SyncSettings:
    """
    Load settings for a project root.

    Lookup order for the YAML file: explicit config_path, $DEPSYNC_CONFIG,
    then <root>/depsync.yaml. Environment flags are applied last.

    Raises:
        ConfigError: If the YAML file cannot be read, parsed or validated.
    """
    if config_path is None:
        env_path = os.getenv("DEPSYNC_CONFIG")
        config_path = Path(env_path) if env_path else root / CONFIG_FILENAME

    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot parse {config_path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a mapping, got {type(data).__name__}")

        try:
            settings = SyncSettings(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in {config_path}: {e}") from e

        console.print(f"[green][CONFIG] Settings loaded: {config_path}[/green]")
    else:
        settings = SyncSettings()

    if _env_flag("DEPSYNC_SKIP_AGGREGATE_BUILD"):
        settings.skip_aggregate_build = True

    return settings


def revision_file(revisions_dir: Path, repo_name: str) -> Path:
    return Path(revisions_dir) / f"{repo_name}{REVISION_FILE_SUFFIX}"


def read_revision(revisions_dir: Path, repo_name: str) -> str:
    """
    Read the pinned commit for a repository.

    The first non-blank line of <revisions_dir>/<repo>_repo_revision is used.

    Raises:
        RevisionFileError: If the file is missing, unreadable or holds no revision.
    """
    path = revision_file(revisions_dir, repo_name)
    if not path.is_file():
        raise RevisionFileError(f"Revision file not found: {path}", path)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RevisionFileError(f"Cannot read revision file {path}: {e}", path) from e

    for line in text.splitlines():
        revision = line.strip()
        if revision:
            return revision

    raise RevisionFileError(f"Revision file is empty: {path}", path)
