"""Git operations subpackage.

This subpackage provides abstractions over git operations with support for
testing via fakes.
"""

from supertree.core.git.abc import (
    BranchKind,
    BranchRef,
    Git,
    RepoHandle,
    RepoMode,
    WorktreeInfo,
)
from supertree.core.git.fake import FakeGit
from supertree.core.git.real import RealGit

__all__ = [
    "BranchKind",
    "BranchRef",
    "FakeGit",
    "Git",
    "RealGit",
    "RepoHandle",
    "RepoMode",
    "WorktreeInfo",
]
