"""Production Git implementation using subprocess.

This module provides the real Git implementation that executes actual git
commands via subprocess.
"""

import subprocess
from pathlib import Path

from supertree.core.git.abc import BranchKind, BranchRef, Git, RepoHandle, RepoMode, WorktreeInfo
from supertree.core.subprocess import run_subprocess_with_context

# ============================================================================
# Production Implementation
# ============================================================================


def _absolute(path_text: str, cwd: Path) -> Path:
    path = Path(path_text)
    if not path.is_absolute():
        path = cwd / path
    return path.resolve()


def _command_cwd(repo: RepoHandle) -> Path:
    """Directory git commands for repo run in: the checkout, or the bare repo itself."""
    if repo.workdir is not None:
        return repo.workdir
    return repo.git_dir


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def open_repo(self, cwd: Path) -> RepoHandle:
        """Open the repository containing cwd."""
        result = run_subprocess_with_context(
            [
                "git",
                "rev-parse",
                "--is-bare-repository",
                "--path-format=absolute",
                "--git-dir",
                "--git-common-dir",
            ],
            operation_context=f"open git repository at {cwd}",
            cwd=cwd,
        )
        is_bare_text, git_dir_text, common_dir_text = result.stdout.splitlines()[:3]
        git_dir = _absolute(git_dir_text, cwd)
        common_dir = _absolute(common_dir_text, cwd)

        if is_bare_text.strip() == "true":
            return RepoHandle(
                mode=RepoMode.BARE, git_dir=git_dir, common_dir=common_dir, workdir=None
            )

        toplevel = run_subprocess_with_context(
            ["git", "rev-parse", "--show-toplevel"],
            operation_context=f"find working directory of {cwd}",
            cwd=cwd,
        )
        workdir = _absolute(toplevel.stdout.strip(), cwd)
        mode = RepoMode.WORKTREE if git_dir != common_dir else RepoMode.PLAIN
        return RepoHandle(mode=mode, git_dir=git_dir, common_dir=common_dir, workdir=workdir)

    def find_branch(self, repo: RepoHandle, name: str, kind: BranchKind) -> BranchRef | None:
        """Look up a branch and peel it to its commit."""
        result = subprocess.run(
            ["git", "rev-parse", "--verify", "--quiet", f"{kind.full_name(name)}^{{commit}}"],
            cwd=_command_cwd(repo),
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        return BranchRef(name=name, kind=kind, commit_sha=result.stdout.strip())

    def create_branch(self, repo: RepoHandle, name: str, commit_sha: str) -> None:
        """Create a local branch pointing at commit_sha."""
        run_subprocess_with_context(
            ["git", "branch", "--end-of-options", name, commit_sha],
            operation_context=f"create branch '{name}' at {commit_sha}",
            cwd=_command_cwd(repo),
        )

    def set_upstream(self, repo: RepoHandle, branch: str, upstream: str) -> None:
        """Make local branch track upstream."""
        run_subprocess_with_context(
            ["git", "branch", f"--set-upstream-to={upstream}", "--end-of-options", branch],
            operation_context=f"set upstream of '{branch}' to '{upstream}'",
            cwd=_command_cwd(repo),
        )

    def get_upstream(self, repo: RepoHandle, branch: str) -> str | None:
        """Return the short name of branch's upstream."""
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "--symbolic-full-name", f"{branch}@{{upstream}}"],
            cwd=_command_cwd(repo),
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        upstream = result.stdout.strip()
        return upstream or None

    def add_worktree(self, repo: RepoHandle, name: str, path: Path, branch: str) -> WorktreeInfo:
        """Register a worktree called name at path.

        `git worktree add` names the registry entry after the final path component,
        so when that differs from name the worktree is added at a sibling staging path
        called name and then moved into place; the registry entry keeps its name.
        """
        cwd = _command_cwd(repo)

        if path.name == name:
            run_subprocess_with_context(
                ["git", "worktree", "add", "--end-of-options", str(path), branch],
                operation_context=f"add worktree '{name}' for branch '{branch}' at {path}",
                cwd=cwd,
            )
        else:
            # `git worktree move` nests the source inside an existing destination directory
            if path.is_dir():
                if any(path.iterdir()):
                    raise RuntimeError(
                        f"Failed to add worktree '{name}': '{path}' already exists and is not empty"
                    )
                path.rmdir()
            elif path.exists():
                raise RuntimeError(f"Failed to add worktree '{name}': '{path}' already exists")

            staging = path.parent / name
            run_subprocess_with_context(
                ["git", "worktree", "add", "--end-of-options", str(staging), branch],
                operation_context=f"add worktree '{name}' for branch '{branch}' at {staging}",
                cwd=cwd,
            )
            run_subprocess_with_context(
                ["git", "worktree", "move", str(staging), str(path)],
                operation_context=f"move worktree '{name}' from {staging} to {path}",
                cwd=cwd,
            )

        result = run_subprocess_with_context(
            ["git", "rev-parse", "--path-format=absolute", "--git-dir", "--show-toplevel"],
            operation_context=f"inspect worktree at {path}",
            cwd=path,
        )
        admin_dir_text, toplevel_text = result.stdout.splitlines()[:2]
        head = run_subprocess_with_context(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            operation_context=f"read checked out branch at {path}",
            cwd=path,
        )
        checked_out = head.stdout.strip()

        return WorktreeInfo(
            name=Path(admin_dir_text).name,
            path=Path(toplevel_text),
            branch=None if checked_out == "HEAD" else checked_out,
        )

    def is_valid_branch_name(self, name: str) -> bool:
        """Check name against git's branch-name rules.

        `--branch` also rejects names git would parse as options or as HEAD. It expands
        @{-N} shorthands, so the output must echo name unchanged.
        """
        result = subprocess.run(
            ["git", "check-ref-format", "--branch", name],
            capture_output=True,
            text=True,
            check=False,
        )
        return result.returncode == 0 and result.stdout.strip() == name
