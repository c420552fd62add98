# =============================================================================
# DEPSYNC GIT CLIENT TESTS
# =============================================================================
# Tests for the Git infrastructure client.
# =============================================================================

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from depsync.infra.git_client import GIT_CONFIG_ARGS, GitError, GitProvider
from depsync.infra.process import ProcessError, ProcessResult


def _git_args(mock_runner):
    """Subcommand argv (after 'git' and config flags) of every call."""
    skip = 1 + len(GIT_CONFIG_ARGS)
    return [c.args[0][skip:] for c in mock_runner.run.call_args_list]


class TestGitError:
    """Test GitError exception."""

    def test_git_error_message(self):
        error = GitError("git clone failed: repository not found", output="fatal: not found")
        assert "clone failed" in str(error)
        assert error.output == "fatal: not found"


class TestGitProviderCommands:
    """Test the git command lines GitProvider issues."""

    def test_fetch_all(self, mock_runner, tmp_path):
        GitProvider(mock_runner).fetch_all(tmp_path)
        assert _git_args(mock_runner) == [["fetch", "--all"]]
        assert mock_runner.run.call_args.kwargs["cwd"] == tmp_path

    def test_clone_runs_in_parent(self, mock_runner, tmp_path):
        dest = tmp_path / "cereal"
        GitProvider(mock_runner).clone("https://example.com/cereal.git", dest)
        assert _git_args(mock_runner) == [["clone", "https://example.com/cereal.git", "cereal"]]
        assert mock_runner.run.call_args.kwargs["cwd"] == tmp_path

    def test_checkout(self, mock_runner, tmp_path):
        GitProvider(mock_runner).checkout(tmp_path, "abc123")
        assert _git_args(mock_runner) == [["checkout", "abc123"]]

    def test_force_checkout(self, mock_runner, tmp_path):
        GitProvider(mock_runner).checkout(tmp_path, "abc123", force=True)
        assert _git_args(mock_runner) == [["checkout", "--force", "abc123"]]

    def test_head_revision(self, tmp_path):
        runner = MagicMock()
        runner.run.return_value = ProcessResult(
            args=["git"], returncode=0, cwd=tmp_path, stdout="0123abcd\n"
        )
        assert GitProvider(runner).head_revision(tmp_path) == "0123abcd"

    def test_timeout_forwarded(self, mock_runner, tmp_path):
        GitProvider(mock_runner, timeout=90).fetch_all(tmp_path)
        assert mock_runner.run.call_args.kwargs["timeout"] == 90

    def test_process_error_becomes_git_error(self, tmp_path):
        runner = MagicMock()
        runner.run.side_effect = ProcessError("failed", ["git"], 128, "fatal: bad revision")
        with pytest.raises(GitError) as exc_info:
            GitProvider(runner).checkout(tmp_path, "nope")
        assert "fatal: bad revision" in str(exc_info.value)
        assert exc_info.value.output == "fatal: bad revision"


class TestIsRepository:
    """Test GitProvider.is_repository."""

    def test_missing_path(self, tmp_path):
        assert GitProvider.is_repository(tmp_path / "absent") is False

    def test_plain_directory(self, tmp_path):
        assert GitProvider.is_repository(tmp_path) is False

    def test_directory_with_git_dir(self, tmp_path):
        (tmp_path / ".git").mkdir()
        assert GitProvider.is_repository(tmp_path) is True

    def test_file_is_not_repository(self, tmp_path):
        f = tmp_path / "file"
        f.write_text("x")
        assert GitProvider.is_repository(Path(f)) is False
