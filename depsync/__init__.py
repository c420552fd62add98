"""depsync - fetch, link and build pinned external dependencies."""

__version__ = "1.0.0"
