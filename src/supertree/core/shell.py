"""Shell command execution abstraction.

Running a shell command is the only process-spawning side effect of the task
pipeline, so it sits behind an interface that tests replace with a recording fake.
"""

import subprocess
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_SHELL = "bash"


@dataclass(frozen=True)
class ShellResult:
    """Outcome of a command that was launched."""

    returncode: int
    stdout: str
    stderr: str


class Shell(ABC):
    """Abstract interface for running shell command lines."""

    @abstractmethod
    def run_script(self, script: str, cwd: Path, env: Mapping[str, str] | None) -> ShellResult:
        """Run script through the shell in cwd and wait for it to finish.

        Args:
            script: Command line passed to the shell's -c option
            cwd: Working directory for the command
            env: Complete environment for the command, or None to inherit

        Returns:
            ShellResult with the exit status and captured output

        Raises:
            OSError: If the shell cannot be launched
        """
        ...


class RealShell(Shell):
    """Production implementation using subprocess."""

    def __init__(self, shell: str = DEFAULT_SHELL) -> None:
        self._shell = shell

    def run_script(self, script: str, cwd: Path, env: Mapping[str, str] | None) -> ShellResult:
        result = subprocess.run(
            [self._shell, "-c", script],
            cwd=cwd,
            env=dict(env) if env is not None else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        return ShellResult(returncode=result.returncode, stdout=result.stdout, stderr=result.stderr)
