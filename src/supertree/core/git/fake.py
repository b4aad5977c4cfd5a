"""Fake Git implementation for testing.

FakeGit is an in-memory implementation that holds a single repository's branch
state and records every mutation, enabling fast tests of the worktree workflow
without running git.
"""

from pathlib import Path

from supertree.core.git.abc import BranchKind, BranchRef, Git, RepoHandle, WorktreeInfo

_FORBIDDEN_REF_CHARS = set(" ~^:?*[\\\x7f")


class FakeGit(Git):
    """In-memory fake implementation of git operations.

    Constructor Injection:
    - All state is provided via constructor parameters
    - Mutations made by the code under test are recorded for assertions

    Examples:
        >>> git = FakeGit(
        ...     repos={Path("/work/master"): handle},
        ...     local_branches={"master": "abc123"},
        ...     remote_branches={"origin/feature": "def456"},
        ... )
        >>> git.find_branch(handle, "master", BranchKind.LOCAL).commit_sha
        'abc123'
    """

    def __init__(
        self,
        *,
        repos: dict[Path, RepoHandle] | None = None,
        local_branches: dict[str, str] | None = None,
        remote_branches: dict[str, str] | None = None,
        upstreams: dict[str, str] | None = None,
        create_branch_error: str | None = None,
        set_upstream_error: str | None = None,
        add_worktree_error: str | None = None,
        reported_worktree_paths: dict[Path, Path] | None = None,
        reported_worktree_names: dict[str, str] | None = None,
    ) -> None:
        """Create FakeGit with pre-configured state.

        Args:
            repos: Mapping of directory -> repository opened from it (or any subdirectory)
            local_branches: Mapping of local branch name -> commit sha
            remote_branches: Mapping of remote branch name ('origin/x') -> commit sha
            upstreams: Mapping of local branch name -> upstream short name
            create_branch_error: If set, create_branch() raises RuntimeError with it
            set_upstream_error: If set, set_upstream() raises RuntimeError with it
            add_worktree_error: If set, add_worktree() raises RuntimeError with it
            reported_worktree_paths: Mapping of requested path -> path git "reports",
                for simulating a registry that disagrees with the request
            reported_worktree_names: Mapping of requested name -> registry entry name git
                "reports", for simulating a suffixed entry
        """
        self._repos = repos or {}
        self._branches: dict[BranchKind, dict[str, str]] = {
            BranchKind.LOCAL: dict(local_branches or {}),
            BranchKind.REMOTE: dict(remote_branches or {}),
        }
        self._upstreams = dict(upstreams or {})
        self._create_branch_error = create_branch_error
        self._set_upstream_error = set_upstream_error
        self._add_worktree_error = add_worktree_error
        self._reported_worktree_paths = reported_worktree_paths or {}
        self._reported_worktree_names = reported_worktree_names or {}
        self._created_branches: list[tuple[str, str]] = []
        self._upstream_calls: list[tuple[str, str]] = []
        self._added_worktrees: list[WorktreeInfo] = []

    @property
    def created_branches(self) -> list[tuple[str, str]]:
        """Read-only access to created branches as (name, commit_sha) tuples."""
        return self._created_branches

    @property
    def upstream_calls(self) -> list[tuple[str, str]]:
        """Read-only access to set_upstream() calls as (branch, upstream) tuples."""
        return self._upstream_calls

    @property
    def added_worktrees(self) -> list[WorktreeInfo]:
        """Read-only access to worktrees registered through add_worktree()."""
        return self._added_worktrees

    def open_repo(self, cwd: Path) -> RepoHandle:
        """Return the repository configured for cwd or its nearest parent."""
        for candidate in [cwd, *cwd.parents]:
            if candidate in self._repos:
                return self._repos[candidate]
        raise RuntimeError(f"Failed to open git repository at {cwd}: not a git repository")

    def find_branch(self, repo: RepoHandle, name: str, kind: BranchKind) -> BranchRef | None:
        """Look up a branch in the configured state."""
        commit_sha = self._branches[kind].get(name)
        if commit_sha is None:
            return None
        return BranchRef(name=name, kind=kind, commit_sha=commit_sha)

    def create_branch(self, repo: RepoHandle, name: str, commit_sha: str) -> None:
        """Record branch creation."""
        if self._create_branch_error is not None:
            raise RuntimeError(self._create_branch_error)
        if name in self._branches[BranchKind.LOCAL]:
            raise RuntimeError(f"Failed to create branch '{name}': a branch named '{name}' exists")
        self._branches[BranchKind.LOCAL][name] = commit_sha
        self._created_branches.append((name, commit_sha))

    def set_upstream(self, repo: RepoHandle, branch: str, upstream: str) -> None:
        """Record upstream configuration."""
        if self._set_upstream_error is not None:
            raise RuntimeError(self._set_upstream_error)
        self._upstreams[branch] = upstream
        self._upstream_calls.append((branch, upstream))

    def get_upstream(self, repo: RepoHandle, branch: str) -> str | None:
        """Return the recorded upstream."""
        return self._upstreams.get(branch)

    def add_worktree(self, repo: RepoHandle, name: str, path: Path, branch: str) -> WorktreeInfo:
        """Record worktree registration and create its (empty) directory on disk."""
        if self._add_worktree_error is not None:
            raise RuntimeError(self._add_worktree_error)
        path.mkdir(parents=True, exist_ok=True)
        info = WorktreeInfo(
            name=self._reported_worktree_names.get(name, name),
            path=self._reported_worktree_paths.get(path, path),
            branch=branch,
        )
        self._added_worktrees.append(info)
        return info

    def is_valid_branch_name(self, name: str) -> bool:
        """Apply the common subset of git's reference-name rules."""
        if not name or name.startswith(("-", "/")) or name.endswith(("/", ".", ".lock")):
            return False
        if ".." in name or "//" in name or "@{" in name or name in ("@", "HEAD"):
            return False
        if any(ch in _FORBIDDEN_REF_CHARS or ord(ch) < 0x20 for ch in name):
            return False
        return not any(part.startswith(".") for part in name.split("/"))
