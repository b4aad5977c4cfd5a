"""Sequential execution of a project's post-creation tasks."""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from supertree.cli.output import user_output
from supertree.core.config_store import CopyPathTask, ShellTask, Task
from supertree.core.errors import TaskError
from supertree.core.shell import Shell
from supertree.core.tasks.copy_path import copy_path
from supertree.core.tasks.shell_task import run_shell_task

logger = logging.getLogger(__name__)


def select_source_dir(root: Path, primary_branch: str) -> Path:
    """Directory task inputs are read from.

    The primary branch's worktree (root/<primary_branch>) when it exists, so
    templated assets can live in that checkout; otherwise the root itself.
    """
    source_dir = root / primary_branch
    if source_dir.exists():
        return source_dir

    user_output(f"{source_dir} not found, using repo root {root}")
    return root


def run_tasks(
    shell: Shell,
    source_dir: Path,
    target_dir: Path,
    tasks: Sequence[Task],
    env: Mapping[str, str] | None,
) -> None:
    """Run tasks in order against target_dir, stopping at the first failure.

    Args:
        shell: Shell used for Shell tasks
        source_dir: Directory CopyPath sources are relative to
        target_dir: The new worktree
        tasks: Tasks to run, in order
        env: Environment for Shell tasks, or None to inherit the process environment

    Raises:
        TaskError: If a task fails; later tasks are not run
    """
    try:
        work_dir = target_dir.resolve(strict=True)
    except OSError as e:
        raise TaskError(None, f"resolve worktree path {target_dir}", str(e)) from e

    for index, task in enumerate(tasks):
        logger.debug("Running task %d/%d: %s", index + 1, len(tasks), task.describe())
        try:
            match task:
                case CopyPathTask():
                    copy_path(task, source_dir, work_dir)
                case ShellTask():
                    run_shell_task(shell, task, work_dir, env)
        except OSError as e:
            raise TaskError(index, task.describe(), str(e)) from e
