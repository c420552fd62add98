# -----------------------------------------------------------------------------
# CORE LAYER
# -----------------------------------------------------------------------------
# The business logic of depsync:
# - RepositoryUpdater: pinned clone / update of one checkout
# - link_override: symlink a caller-provided checkout instead of fetching
# - SubBuilder: Release CMake builds inside fetched repos
# - run_post_fetch: vendored code generation hooks
# - AggregateBuilder: final xcodebuild of all dependencies
# - DependencySynchronizer: the ordered pipeline over the manifest
# -----------------------------------------------------------------------------

from .aggregate import AggregateBuilder, AggregateBuildError
from .builder import BuildError, SubBuilder
from .codegen import CodegenError, run_post_fetch
from .manifest import DEFAULT_REPOSITORIES
from .overrides import link_override
from .synchronizer import DependencySynchronizer, SyncError, SyncReport
from .updater import RepositoryUpdater, RepoUpdate

__all__ = [
    "AggregateBuilder", "AggregateBuildError",
    "BuildError", "SubBuilder",
    "CodegenError", "run_post_fetch",
    "DEFAULT_REPOSITORIES",
    "link_override",
    "DependencySynchronizer", "SyncError", "SyncReport",
    "RepositoryUpdater", "RepoUpdate",
]
