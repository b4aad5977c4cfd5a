"""Application context with dependency injection."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import click

from supertree.cli.output import user_output
from supertree.core.config_store import (
    ConfigStore,
    FakeConfigStore,
    RealConfigStore,
    RootConfig,
    default_config_path,
)
from supertree.core.git.abc import Git
from supertree.core.git.real import RealGit
from supertree.core.shell import RealShell, Shell


@dataclass(frozen=True)
class SupertreeContext:
    """Immutable context holding all dependencies for supertree operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime. The working directory
    and environment are captured here once so nothing below reads them ambiently.
    """

    git: Git
    shell: Shell
    config_store: ConfigStore
    cwd: Path  # Current working directory at CLI invocation
    env: Mapping[str, str] = field(default_factory=dict)

    @staticmethod
    def for_test(
        git: Git | None = None,
        shell: Shell | None = None,
        config_store: ConfigStore | None = None,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> "SupertreeContext":
        """Create test context with optional pre-configured integration classes.

        Args:
            git: Optional Git implementation. If None, creates empty FakeGit.
            shell: Optional Shell implementation. If None, creates empty FakeShell.
            config_store: Optional ConfigStore. If None, uses FakeConfigStore with defaults.
            cwd: Optional current working directory. If None, uses Path("/test/default/cwd").
            env: Optional environment for Shell tasks. If None, uses an empty mapping.

        Returns:
            SupertreeContext configured with provided values and test defaults

        Example:
            >>> git = FakeGit(local_branches={"master": "abc123"})
            >>> ctx = SupertreeContext.for_test(git=git, cwd=Path("/work/master"))
        """
        from tests.fakes.shell import FakeShell

        from supertree.core.git.fake import FakeGit

        if git is None:
            git = FakeGit()

        if shell is None:
            shell = FakeShell()

        if config_store is None:
            config_store = FakeConfigStore(config=RootConfig())

        return SupertreeContext(
            git=git,
            shell=shell,
            config_store=config_store,
            cwd=cwd or Path("/test/default/cwd"),
            env=env or {},
        )


def safe_cwd() -> tuple[Path | None, str | None]:
    """Get current working directory, detecting if it no longer exists.

    Returns:
        tuple[Path | None, str | None]: (path, error_message)
        - If successful: (Path, None)
        - If directory deleted: (None, error_message)
    """
    try:
        return (Path.cwd(), None)
    except (FileNotFoundError, OSError):
        return (None, "Current working directory no longer exists")


def create_context() -> SupertreeContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.
    """
    cwd, error_msg = safe_cwd()
    if cwd is None:
        assert error_msg is not None
        user_output(click.style("Error: ", fg="red") + error_msg)
        user_output("Please change to a valid directory and try again.")
        raise SystemExit(1)

    env = dict(os.environ)

    return SupertreeContext(
        git=RealGit(),
        shell=RealShell(),
        config_store=RealConfigStore(default_config_path(env)),
        cwd=cwd,
        env=env,
    )
