"""Shell task: run a command line inside the new worktree."""

import logging
from collections.abc import Mapping
from pathlib import Path

from supertree.cli.output import user_output
from supertree.core.config_store import ShellTask
from supertree.core.shell import Shell

logger = logging.getLogger(__name__)


def run_shell_task(
    shell: Shell, task: ShellTask, cwd: Path, env: Mapping[str, str] | None
) -> None:
    """Run task.cmd with cwd as working directory.

    The command's exit status and output are not inspected; only a failure to
    launch the shell propagates (as OSError).
    """
    user_output(f"Running command `{task.cmd}`")
    result = shell.run_script(task.cmd, cwd, env)
    logger.debug(
        "Command `%s` exited with %d\nstdout: %s\nstderr: %s",
        task.cmd,
        result.returncode,
        result.stdout.strip(),
        result.stderr.strip(),
    )
