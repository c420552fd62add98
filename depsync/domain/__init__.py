# -----------------------------------------------------------------------------
# DOMAIN LAYER
# -----------------------------------------------------------------------------
# Contains the dependency records (Pydantic models) and the settings /
# revision-file readers they are resolved against.
# -----------------------------------------------------------------------------

from .config import ConfigError, RevisionFileError, SyncSettings, load_settings, read_revision
from .models import BuildTarget, RepoEntry, RepoSpec, ScriptStep, SyncConfig

__all__ = [
    "BuildTarget", "RepoEntry", "RepoSpec", "ScriptStep", "SyncConfig",
    "ConfigError", "RevisionFileError", "SyncSettings", "load_settings", "read_revision",
]
