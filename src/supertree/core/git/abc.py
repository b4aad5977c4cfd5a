"""High-level git operations interface.

This module provides a clean abstraction over the version-control provider, so the
worktree workflow never talks to git directly.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using the git executable
- FakeGit: In-memory implementation for tests
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class RepoMode(Enum):
    """How the current checkout relates to its repository."""

    BARE = "bare"
    WORKTREE = "worktree"
    PLAIN = "plain"


class BranchKind(Enum):
    """Namespace a branch lives in."""

    LOCAL = "local"
    REMOTE = "remote"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def full_name(self, name: str) -> str:
        prefix = "refs/heads/" if self is BranchKind.LOCAL else "refs/remotes/"
        return prefix + name


@dataclass(frozen=True)
class RepoHandle:
    """An opened repository.

    git_dir is the metadata directory of the checkout the caller stands in: the bare
    repository itself, or <common_dir>/worktrees/<name> for a linked worktree.
    workdir is None for bare repositories.
    """

    mode: RepoMode
    git_dir: Path
    common_dir: Path
    workdir: Path | None


@dataclass(frozen=True)
class BranchRef:
    """A branch that resolved to a commit."""

    name: str
    kind: BranchKind
    commit_sha: str

    @property
    def full_name(self) -> str:
        return self.kind.full_name(self.name)


@dataclass(frozen=True)
class WorktreeInfo:
    """A registered worktree as reported by git."""

    name: str
    path: Path
    branch: str | None


# ============================================================================
# Abstract Interface
# ============================================================================


class Git(ABC):
    """Abstract interface for git operations.

    All implementations (real and fake) must implement this interface.
    This interface contains ONLY runtime operations - no test setup methods.
    """

    @abstractmethod
    def open_repo(self, cwd: Path) -> RepoHandle:
        """Open the repository containing cwd, walking up as git does.

        Raises:
            RuntimeError: If cwd is not inside a git repository
        """
        ...

    @abstractmethod
    def find_branch(self, repo: RepoHandle, name: str, kind: BranchKind) -> BranchRef | None:
        """Look up a branch and peel it to its commit.

        Returns:
            BranchRef, or None if no such branch exists
        """
        ...

    @abstractmethod
    def create_branch(self, repo: RepoHandle, name: str, commit_sha: str) -> None:
        """Create a local branch pointing at commit_sha without checking it out.

        Raises:
            RuntimeError: If git rejects the branch (collision, unknown commit)
        """
        ...

    @abstractmethod
    def set_upstream(self, repo: RepoHandle, branch: str, upstream: str) -> None:
        """Make local branch track upstream (e.g. 'origin/feature').

        Raises:
            RuntimeError: If git rejects the upstream
        """
        ...

    @abstractmethod
    def get_upstream(self, repo: RepoHandle, branch: str) -> str | None:
        """Return the short name of branch's upstream, or None if it has none."""
        ...

    @abstractmethod
    def add_worktree(self, repo: RepoHandle, name: str, path: Path, branch: str) -> WorktreeInfo:
        """Register a worktree called name at path with branch checked out.

        The name is the entry in git's flat worktree registry and must not contain
        path separators.

        Returns:
            WorktreeInfo describing the worktree as git reports it

        Raises:
            RuntimeError: If git refuses (path not empty, duplicate name, ...)
        """
        ...

    @abstractmethod
    def is_valid_branch_name(self, name: str) -> bool:
        """Check name against git's reference-name rules."""
        ...
