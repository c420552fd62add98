# =============================================================================
# DEPSYNC UPDATER TESTS
# =============================================================================
# Unit tests with a mocked GitProvider, plus end-to-end checks against real
# local git repositories.
# =============================================================================

from unittest.mock import MagicMock

import pytest

from conftest import commit_file, git, requires_git
from depsync.core.updater import ACTION_CLONED, ACTION_UPDATED, RepositoryUpdater, remove_entry
from depsync.infra.git_client import GitError, GitProvider
from depsync.infra.process import ProcessRunner


@pytest.fixture
def mock_git():
    provider = MagicMock()
    provider.is_repository.side_effect = GitProvider.is_repository
    provider.head_revision.return_value = "abc123" + "0" * 34
    return provider


class TestRemoveEntry:
    """Test remove_entry."""

    def test_removes_directory_tree(self, tmp_path):
        d = tmp_path / "tree"
        (d / "nested").mkdir(parents=True)
        (d / "nested" / "f.txt").write_text("x")
        remove_entry(d)
        assert not d.exists()

    def test_removes_file(self, tmp_path):
        f = tmp_path / "file"
        f.write_text("x")
        remove_entry(f)
        assert not f.exists()

    def test_removes_symlink_not_target(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        (target / "keep.txt").write_text("keep")
        link = tmp_path / "link"
        link.symlink_to(target, target_is_directory=True)

        remove_entry(link)

        assert not link.is_symlink()
        assert (target / "keep.txt").exists()

    def test_missing_path_is_noop(self, tmp_path):
        remove_entry(tmp_path / "absent")


class TestRepositoryUpdaterUnit:
    """RepositoryUpdater decisions with a mocked GitProvider."""

    def test_fresh_clone(self, mock_git, tmp_path):
        updater = RepositoryUpdater(mock_git, tmp_path / "External")
        update = updater.update_repo("cereal", "https://example.com/cereal.git", "abc123")

        dest = tmp_path / "External" / "cereal"
        mock_git.clone.assert_called_once_with("https://example.com/cereal.git", dest)
        mock_git.checkout.assert_called_once_with(dest, "abc123")
        mock_git.fetch_all.assert_not_called()
        assert update.action == ACTION_CLONED
        assert (tmp_path / "External").is_dir()

    def test_existing_checkout_is_updated(self, mock_git, tmp_path):
        repo = tmp_path / "cereal"
        (repo / ".git").mkdir(parents=True)

        update = RepositoryUpdater(mock_git, tmp_path).update_repo("cereal", "url", "def456")

        mock_git.fetch_all.assert_called_once_with(repo)
        mock_git.checkout.assert_called_once_with(repo, "def456", force=True)
        mock_git.clone.assert_not_called()
        assert update.action == ACTION_UPDATED
        assert update.head == mock_git.head_revision.return_value

    def test_plain_directory_is_replaced(self, mock_git, tmp_path):
        repo = tmp_path / "cereal"
        repo.mkdir()
        (repo / "stale.txt").write_text("old")

        RepositoryUpdater(mock_git, tmp_path).update_repo("cereal", "url", "abc123")

        assert not (repo / "stale.txt").exists()
        mock_git.clone.assert_called_once()

    def test_symlink_is_replaced_not_followed(self, mock_git, tmp_path):
        """A leftover override link is removed; its target is untouched."""
        target = tmp_path / "elsewhere"
        (target / ".git").mkdir(parents=True)
        external = tmp_path / "External"
        external.mkdir()
        (external / "glslang").symlink_to(target, target_is_directory=True)

        RepositoryUpdater(mock_git, external).update_repo("glslang", "url", "abc123")

        mock_git.fetch_all.assert_not_called()
        mock_git.clone.assert_called_once()
        assert (target / ".git").is_dir()

    def test_git_error_propagates(self, mock_git, tmp_path):
        mock_git.clone.side_effect = GitError("git clone failed")
        with pytest.raises(GitError):
            RepositoryUpdater(mock_git, tmp_path).update_repo("cereal", "url", "abc123")
        mock_git.checkout.assert_not_called()


@requires_git
class TestRepositoryUpdaterIntegration:
    """RepositoryUpdater against real git repositories."""

    @pytest.fixture
    def updater(self, tmp_path):
        provider = GitProvider(ProcessRunner())
        return RepositoryUpdater(provider, tmp_path / "External")

    def test_fresh_clone_lands_on_pinned_commit(self, updater, upstream_repo, tmp_path):
        upstream, (first, _second) = upstream_repo

        update = updater.update_repo("dep", str(upstream), first)

        checkout = tmp_path / "External" / "dep"
        assert git(checkout, "rev-parse", "HEAD") == first
        assert update.head == first
        assert (checkout / "README.md").read_text() == "first\n"

    def test_update_moves_to_new_pin_and_discards_changes(self, updater, upstream_repo, tmp_path):
        upstream, (first, second) = upstream_repo
        updater.update_repo("dep", str(upstream), first)

        checkout = tmp_path / "External" / "dep"
        (checkout / "README.md").write_text("local edit\n")

        update = updater.update_repo("dep", str(upstream), second)

        assert update.action == ACTION_UPDATED
        assert git(checkout, "rev-parse", "HEAD") == second
        assert git(checkout, "status", "--porcelain", "--untracked-files=no") == ""
        assert (checkout / "README.md").read_text() == "second\n"

    def test_update_sees_new_upstream_commits(self, updater, upstream_repo, tmp_path):
        """fetch --all makes commits pushed after the clone reachable."""
        upstream, (first, _second) = upstream_repo
        updater.update_repo("dep", str(upstream), first)

        third = commit_file(upstream, "NEW.md", "third\n")
        updater.update_repo("dep", str(upstream), third)

        assert git(tmp_path / "External" / "dep", "rev-parse", "HEAD") == third

    def test_plain_directory_replaced_by_clone(self, updater, upstream_repo, tmp_path):
        upstream, (_first, second) = upstream_repo
        plain = tmp_path / "External" / "dep"
        plain.mkdir(parents=True)
        (plain / "junk.bin").write_text("junk")

        update = updater.update_repo("dep", str(upstream), second)

        assert update.action == ACTION_CLONED
        assert not (plain / "junk.bin").exists()
        assert git(plain, "rev-parse", "HEAD") == second

    def test_unknown_revision_fails(self, updater, upstream_repo):
        upstream, _ = upstream_repo
        with pytest.raises(GitError):
            updater.update_repo("dep", str(upstream), "0" * 40)
