"""End-to-end creation of a worktree.

resolve_root -> resolve_source_branch -> provision_worktree -> run_tasks. Each
stage completes before the next starts and any failure aborts the remaining stages.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from supertree.cli.output import user_output
from supertree.core.branch_resolution import resolve_source_branch
from supertree.core.config_store import ProjectConfig, RootConfig
from supertree.core.errors import InvalidBranchNameError
from supertree.core.git.abc import Git, RepoHandle
from supertree.core.provisioning import provision_worktree
from supertree.core.root_resolution import resolve_root
from supertree.core.shell import Shell
from supertree.core.tasks import run_tasks, select_source_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorktreeRequest:
    """What the user asked for.

    Attributes:
        branch_name: Branch to check out; may contain '/' for nested directories
        remote_hint: None for the local primary branch, "" for the remote branch
            named like branch_name, or an explicit remote branch name
        skip_tasks: Whether to skip the post-creation tasks
    """

    branch_name: str
    remote_hint: str | None
    skip_tasks: bool


def create_worktree(
    git: Git,
    shell: Shell,
    repo: RepoHandle,
    request: WorktreeRequest,
    project_config: ProjectConfig,
    env: Mapping[str, str] | None,
) -> Path:
    """Create and prepare the worktree described by request.

    Args:
        git: Git operations interface
        shell: Shell used by Shell tasks
        repo: Repository opened from the caller's directory
        request: Branch, remote hint and skip-tasks flag
        project_config: Config of the project repo belongs to
        env: Environment for Shell tasks, or None to inherit

    Returns:
        Path of the new worktree

    Raises:
        SupertreeError: Subclass describing the stage that failed
    """
    if not git.is_valid_branch_name(request.branch_name):
        raise InvalidBranchNameError(request.branch_name)

    root = resolve_root(repo)

    source_ref = resolve_source_branch(
        git,
        repo,
        request.branch_name,
        request.remote_hint,
        primary_branch=project_config.primary_branch,
        primary_remote=project_config.primary_remote,
    )
    user_output(f"Using {source_ref.kind.label} ref branch {source_ref.name} for checkout")

    worktree_path = provision_worktree(
        git,
        repo,
        root,
        request.branch_name,
        source_ref,
        remote_hint_present=request.remote_hint is not None,
    )
    user_output(f"Created worktree at {worktree_path}")

    if request.skip_tasks:
        logger.debug("Skipping %d task(s) as requested", len(project_config.tasks))
        return worktree_path

    source_dir = select_source_dir(root, project_config.primary_branch)
    run_tasks(shell, source_dir, worktree_path, project_config.tasks, env)
    return worktree_path


def select_project(root_config: RootConfig, repo: RepoHandle) -> ProjectConfig:
    """Config of the project repo belongs to, keyed by the root directory's name."""
    root = resolve_root(repo)
    logger.debug("Selecting config for project '%s'", root.name)
    return root_config.project_for(root.name)
