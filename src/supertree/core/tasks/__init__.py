"""Post-creation task pipeline."""

from supertree.core.tasks.copy_path import copy_path
from supertree.core.tasks.pipeline import run_tasks, select_source_dir
from supertree.core.tasks.shell_task import run_shell_task

__all__ = ["copy_path", "run_shell_task", "run_tasks", "select_source_dir"]
