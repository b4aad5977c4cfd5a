"""Repository root resolution.

The repository root is the directory holding every worktree of a repository. For
the layout this tool manages, the bare repository's metadata directory and all
worktrees are siblings under that root:

    root/
      ├── repo.git/                 (bare repository)
      │     └── worktrees/master/   (metadata of the master worktree)
      ├── master/                   (worktree)
      └── feature/x/                (worktree of branch feature/x)
"""

import logging
from pathlib import Path

from supertree.core.errors import RootResolutionError
from supertree.core.git.abc import RepoHandle, RepoMode

logger = logging.getLogger(__name__)


def resolve_root(repo: RepoHandle) -> Path:
    """Return the directory containing all worktrees of repo.

    Works the same whether repo was opened from the bare repository or from one of
    its linked worktrees.

    Raises:
        RootResolutionError: If repo is a plain checkout, or the path has no parent
    """
    match repo.mode:
        case RepoMode.WORKTREE:
            if repo.workdir is None:
                raise RootResolutionError(f"Worktree at {repo.git_dir} has no working directory")
            root = _root_from_worktree(repo.git_dir, repo.workdir)
        case RepoMode.BARE:
            root = _parent_of(repo.git_dir)
        case _:
            raise RootResolutionError(
                f"Repository at {repo.git_dir} is neither a bare repository nor a worktree of one"
            )

    logger.debug("Resolved repository root %s from %s (%s)", root, repo.git_dir, repo.mode.value)
    return root


def _root_from_worktree(git_dir: Path, workdir: Path) -> Path:
    """Walk git_dir until it diverges from workdir; the root is where they split.

    A linked worktree's metadata sits at <bare-repo>/worktrees/<name>, while the
    working directory is a sibling of <bare-repo>. The first accumulated component
    that is not an ancestor of workdir is therefore the bare repository directory
    (however deep it is nested), and its parent is the root.
    """
    candidate = Path(git_dir.anchor)
    for part in git_dir.parts[1:]:
        candidate = candidate / part
        if not workdir.is_relative_to(candidate):
            break

    return _parent_of(candidate)


def _parent_of(path: Path) -> Path:
    if path.parent == path:
        raise RootResolutionError(f"Failed to get root path: {path} has no parent directory")
    return path.parent
