"""Creation and registration of the new worktree.

Provisioning is idempotent with respect to the branch: an existing local branch of
the requested name is checked out as-is, otherwise a new branch is created from the
resolved source ref. Nothing created here is rolled back when a later step fails.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from supertree.core.errors import (
    BranchCreationError,
    UpstreamSetError,
    WorktreeInvariantError,
    WorktreeRegistrationError,
)
from supertree.core.git.abc import BranchKind, BranchRef, Git, RepoHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReuseExistingBranch:
    """A local branch with the requested name exists; check it out unchanged."""

    branch: BranchRef


@dataclass(frozen=True)
class CreateNewBranch:
    """No local branch exists; create one at start_point.

    upstream is the short name of the ref to track, or None for no tracking.
    """

    name: str
    start_point: BranchRef
    upstream: str | None


BranchDecision = ReuseExistingBranch | CreateNewBranch


def worktree_path_for(root: Path, branch_name: str) -> Path:
    """Directory for branch_name's worktree; 'feature/x' nests as root/feature/x."""
    return root.joinpath(*[segment for segment in branch_name.split("/") if segment])


def worktree_name_for(branch_name: str) -> str:
    """Entry name in git's flat worktree registry for branch_name."""
    return branch_name.replace("/", "_")


def decide_branch(
    git: Git,
    repo: RepoHandle,
    desired_branch: str,
    source_ref: BranchRef,
    *,
    remote_hint_present: bool,
) -> BranchDecision:
    """Choose between reusing an existing local branch and creating a new one."""
    existing = git.find_branch(repo, desired_branch, BranchKind.LOCAL)
    if existing is not None:
        return ReuseExistingBranch(branch=existing)

    return CreateNewBranch(
        name=desired_branch,
        start_point=source_ref,
        upstream=source_ref.name if remote_hint_present else None,
    )


def apply_branch_decision(git: Git, repo: RepoHandle, decision: BranchDecision) -> str:
    """Carry out decision and return the name of the branch to check out.

    Raises:
        BranchCreationError: If git refuses to create the branch
        UpstreamSetError: If git refuses to set the upstream
    """
    match decision:
        case ReuseExistingBranch(branch=branch):
            logger.debug("Reusing existing local branch '%s'", branch.name)
            return branch.name
        case CreateNewBranch(name=name, start_point=start_point, upstream=upstream):
            try:
                git.create_branch(repo, name, start_point.commit_sha)
            except RuntimeError as e:
                raise BranchCreationError(
                    f"Failed to create new branch '{name}' from {start_point.full_name}: {e}"
                ) from e

            if upstream is not None:
                try:
                    git.set_upstream(repo, name, upstream)
                except RuntimeError as e:
                    raise UpstreamSetError(
                        f"Failed to set upstream for branch '{name}' to '{upstream}': {e}"
                    ) from e

            return name


def provision_worktree(
    git: Git,
    repo: RepoHandle,
    root: Path,
    desired_branch: str,
    source_ref: BranchRef,
    *,
    remote_hint_present: bool,
) -> Path:
    """Create the worktree for desired_branch under root and return its path.

    Args:
        git: Git operations interface
        repo: Repository the worktree belongs to
        root: Repository root from resolve_root()
        desired_branch: Branch to check out; '/' produces nested directories
        source_ref: Branch a newly created branch starts from
        remote_hint_present: Whether the new branch should track source_ref

    Returns:
        Absolute path of the new worktree

    Raises:
        BranchCreationError: If the branch cannot be created
        UpstreamSetError: If upstream tracking cannot be configured
        WorktreeRegistrationError: If git refuses to register the worktree, or registers
            it under another name
        WorktreeInvariantError: If git registered the worktree at another path
    """
    target = worktree_path_for(root, desired_branch)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WorktreeRegistrationError(
            f"Failed to create directory {target.parent}: {e.strerror or e}"
        ) from e

    decision = decide_branch(
        git, repo, desired_branch, source_ref, remote_hint_present=remote_hint_present
    )
    branch = apply_branch_decision(git, repo, decision)

    name = worktree_name_for(desired_branch)
    try:
        info = git.add_worktree(repo, name, target, branch)
    except RuntimeError as e:
        raise WorktreeRegistrationError(
            f"Failed to register worktree '{name}' at {target}: {e}"
        ) from e

    if info.path.resolve() != target.resolve():
        raise WorktreeInvariantError(
            f"Worktree '{name}' was registered at {info.path}, expected {target}"
        )
    if info.name != name:
        # a stale registry entry with the same name makes git pick a suffixed one
        raise WorktreeRegistrationError(
            f"Worktree at {target} was registered as '{info.name}' instead of '{name}'; "
            "run `git worktree prune` to drop stale entries"
        )

    logger.debug("Registered worktree '%s' at %s on branch '%s'", info.name, target, branch)
    return target
