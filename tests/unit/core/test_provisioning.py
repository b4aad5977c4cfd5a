"""Tests for worktree provisioning with FakeGit."""

from pathlib import Path

import pytest

from supertree.core.errors import (
    BranchCreationError,
    UpstreamSetError,
    WorktreeInvariantError,
    WorktreeRegistrationError,
)
from supertree.core.git.abc import BranchKind, BranchRef, WorktreeInfo
from supertree.core.git.fake import FakeGit
from supertree.core.provisioning import (
    CreateNewBranch,
    ReuseExistingBranch,
    decide_branch,
    provision_worktree,
    worktree_name_for,
    worktree_path_for,
)
from tests.test_utils.repo_handles import worktree_handle

MASTER = BranchRef(name="master", kind=BranchKind.LOCAL, commit_sha="abc123")
ORIGIN_FEATURE = BranchRef(name="origin/feature", kind=BranchKind.REMOTE, commit_sha="def456")


def test_worktree_path_nests_slash_separated_segments() -> None:
    root = Path("/work/project")

    assert worktree_path_for(root, "feature/x") == Path("/work/project/feature/x")
    assert worktree_path_for(root, "hotfix") == Path("/work/project/hotfix")


def test_worktree_name_flattens_slashes() -> None:
    assert worktree_name_for("feature/deep/x") == "feature_deep_x"
    assert worktree_name_for("hotfix") == "hotfix"


def test_decide_reuses_existing_local_branch_even_with_remote_hint() -> None:
    git = FakeGit(local_branches={"feature": "111aaa"})
    repo = worktree_handle(Path("/work/project"))

    decision = decide_branch(git, repo, "feature", ORIGIN_FEATURE, remote_hint_present=True)

    assert decision == ReuseExistingBranch(
        branch=BranchRef(name="feature", kind=BranchKind.LOCAL, commit_sha="111aaa")
    )


def test_decide_tracks_source_only_when_remote_hint_present() -> None:
    git = FakeGit()
    repo = worktree_handle(Path("/work/project"))

    with_hint = decide_branch(git, repo, "feature", ORIGIN_FEATURE, remote_hint_present=True)
    without_hint = decide_branch(git, repo, "feature", MASTER, remote_hint_present=False)

    assert with_hint == CreateNewBranch(
        name="feature", start_point=ORIGIN_FEATURE, upstream="origin/feature"
    )
    assert without_hint == CreateNewBranch(name="feature", start_point=MASTER, upstream=None)


def test_provision_creates_nested_worktree_from_source_commit(tmp_path: Path) -> None:
    root = tmp_path / "project"
    git = FakeGit(local_branches={"master": "abc123"})
    repo = worktree_handle(root)

    path = provision_worktree(git, repo, root, "feature/x", MASTER, remote_hint_present=False)

    assert path == root / "feature" / "x"
    assert path.is_dir()
    assert git.created_branches == [("feature/x", "abc123")]
    assert git.upstream_calls == []
    assert git.added_worktrees == [WorktreeInfo(name="feature_x", path=path, branch="feature/x")]


def test_provision_sets_upstream_for_remote_source(tmp_path: Path) -> None:
    root = tmp_path / "project"
    git = FakeGit(remote_branches={"origin/feature": "def456"})
    repo = worktree_handle(root)

    provision_worktree(git, repo, root, "feature", ORIGIN_FEATURE, remote_hint_present=True)

    assert git.created_branches == [("feature", "def456")]
    assert git.upstream_calls == [("feature", "origin/feature")]
    assert git.get_upstream(repo, "feature") == "origin/feature"


def test_provision_reuses_existing_branch_without_touching_upstream(tmp_path: Path) -> None:
    root = tmp_path / "project"
    git = FakeGit(
        local_branches={"master": "abc123", "feature": "999fff"},
        upstreams={"feature": "origin/old"},
    )
    repo = worktree_handle(root)

    provision_worktree(git, repo, root, "feature", ORIGIN_FEATURE, remote_hint_present=True)

    assert git.created_branches == []
    assert git.upstream_calls == []
    assert git.get_upstream(repo, "feature") == "origin/old"
    assert [info.branch for info in git.added_worktrees] == ["feature"]


def test_branch_creation_failure_is_wrapped(tmp_path: Path) -> None:
    root = tmp_path / "project"
    git = FakeGit(create_branch_error="fatal: cannot lock ref")
    repo = worktree_handle(root)

    with pytest.raises(BranchCreationError, match="cannot lock ref") as exc_info:
        provision_worktree(git, repo, root, "feature", MASTER, remote_hint_present=False)

    assert "refs/heads/master" in str(exc_info.value)
    assert git.added_worktrees == []


def test_upstream_failure_is_wrapped_and_branch_is_kept(tmp_path: Path) -> None:
    root = tmp_path / "project"
    git = FakeGit(set_upstream_error="fatal: no such remote")
    repo = worktree_handle(root)

    with pytest.raises(UpstreamSetError, match="origin/feature"):
        provision_worktree(git, repo, root, "feature", ORIGIN_FEATURE, remote_hint_present=True)

    assert git.created_branches == [("feature", "def456")]
    assert git.added_worktrees == []


def test_registration_failure_leaves_parent_directories(tmp_path: Path) -> None:
    root = tmp_path / "project"
    git = FakeGit(add_worktree_error="fatal: already exists")
    repo = worktree_handle(root)

    with pytest.raises(WorktreeRegistrationError, match="feature_x"):
        provision_worktree(git, repo, root, "feature/x", MASTER, remote_hint_present=False)

    assert (root / "feature").is_dir()
    assert not (root / "feature" / "x").exists()


def test_registry_path_mismatch_raises_invariant_error(tmp_path: Path) -> None:
    root = tmp_path / "project"
    target = root / "feature"
    git = FakeGit(reported_worktree_paths={target: root / "elsewhere"})
    repo = worktree_handle(root)

    with pytest.raises(WorktreeInvariantError, match="expected"):
        provision_worktree(git, repo, root, "feature", MASTER, remote_hint_present=False)


def test_registry_name_mismatch_is_reported(tmp_path: Path) -> None:
    root = tmp_path / "project"
    git = FakeGit(reported_worktree_names={"feature": "feature1"})
    repo = worktree_handle(root)

    with pytest.raises(WorktreeRegistrationError, match="'feature1' instead of 'feature'"):
        provision_worktree(git, repo, root, "feature", MASTER, remote_hint_present=False)
