"""Selection of the branch a new worktree is based on."""

import logging

from supertree.core.errors import RefNotFoundError
from supertree.core.git.abc import BranchKind, BranchRef, Git, RepoHandle

logger = logging.getLogger(__name__)


def source_ref_name(
    desired_branch: str,
    remote_hint: str | None,
    *,
    primary_branch: str,
    primary_remote: str,
) -> tuple[BranchKind, str]:
    """Decide which ref to base the new branch on, without consulting git.

    - No remote hint: the local primary branch.
    - Non-empty hint: '<primary_remote>/<hint>'.
    - Empty hint (flag given without a value): '<primary_remote>/<desired_branch>'.
    """
    if remote_hint is None:
        return BranchKind.LOCAL, primary_branch

    remote_branch = remote_hint or desired_branch
    return BranchKind.REMOTE, f"{primary_remote}/{remote_branch}"


def resolve_source_branch(
    git: Git,
    repo: RepoHandle,
    desired_branch: str,
    remote_hint: str | None,
    *,
    primary_branch: str,
    primary_remote: str,
) -> BranchRef:
    """Find the existing branch the new worktree's branch will start from.

    Raises:
        RefNotFoundError: If the selected local or remote branch does not exist
    """
    kind, name = source_ref_name(
        desired_branch,
        remote_hint,
        primary_branch=primary_branch,
        primary_remote=primary_remote,
    )
    logger.debug("Looking up %s branch '%s' for '%s'", kind.value, name, desired_branch)

    branch_ref = git.find_branch(repo, name, kind)
    if branch_ref is None:
        raise RefNotFoundError(kind, name)

    return branch_ref
