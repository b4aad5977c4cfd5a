"""Tests for repository root resolution."""

from pathlib import Path

import pytest

from supertree.core.errors import RootResolutionError
from supertree.core.git.abc import RepoHandle, RepoMode
from supertree.core.root_resolution import resolve_root
from tests.test_utils.repo_handles import bare_handle, plain_handle, worktree_handle


def test_bare_repository_root_is_parent_of_metadata_dir() -> None:
    root = Path("/work/project")

    assert resolve_root(bare_handle(root)) == root


def test_worktree_root_skips_worktrees_segment() -> None:
    root = Path("/work/project")

    assert resolve_root(worktree_handle(root, "master")) == root


def test_nested_worktree_directory_resolves_to_same_root() -> None:
    root = Path("/work/project")

    assert resolve_root(worktree_handle(root, "feature/deep/x")) == root


def test_worktree_of_deeply_nested_bare_repo() -> None:
    """The bare repo may sit several levels below the root."""
    repo = RepoHandle(
        mode=RepoMode.WORKTREE,
        git_dir=Path("/work/project/meta/store/repo.git/worktrees/master"),
        common_dir=Path("/work/project/meta/store/repo.git"),
        workdir=Path("/work/project/master"),
    )

    assert resolve_root(repo) == Path("/work/project")


@pytest.mark.parametrize("branch", ["master", "feature", "bugfix-123", "release_2"])
def test_worktree_and_bare_repo_agree_on_root(branch: str) -> None:
    root = Path("/srv/checkouts/webapp")

    assert resolve_root(worktree_handle(root, branch)) == resolve_root(bare_handle(root))


def test_plain_checkout_is_rejected() -> None:
    with pytest.raises(RootResolutionError, match="neither a bare repository nor a worktree"):
        resolve_root(plain_handle(Path("/work/project")))


def test_bare_repository_at_filesystem_root_has_no_parent() -> None:
    repo = RepoHandle(mode=RepoMode.BARE, git_dir=Path("/"), common_dir=Path("/"), workdir=None)

    with pytest.raises(RootResolutionError, match="no parent"):
        resolve_root(repo)
