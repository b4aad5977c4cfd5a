"""Shared helpers for CLI commands."""

from supertree.cli.ensure import fail
from supertree.core.context import SupertreeContext
from supertree.core.git.abc import RepoHandle


def discover_repo(ctx: SupertreeContext) -> RepoHandle:
    """Open the repository containing ctx.cwd or exit with an error."""
    try:
        return ctx.git.open_repo(ctx.cwd)
    except RuntimeError as e:
        fail(f"Not inside a git repository ({ctx.cwd})\n{e}")
