# -----------------------------------------------------------------------------
# INFRASTRUCTURE LAYER
# -----------------------------------------------------------------------------
# Contains low-level infrastructure wrappers:
# - ProcessRunner: explicit-cwd subprocess execution with structured results
# - GitProvider: git CLI operations on dependency checkouts
# -----------------------------------------------------------------------------

from .git_client import GitError, GitProvider
from .process import ProcessError, ProcessResult, ProcessRunner

__all__ = ["GitError", "GitProvider", "ProcessError", "ProcessResult", "ProcessRunner"]
