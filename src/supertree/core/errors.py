"""Error types raised by the worktree creation workflow.

Every stage raises a SupertreeError subclass carrying enough context (operation,
path, ref) for the CLI to print a single actionable line. The underlying cause is
always chained so debug output keeps the git/OS details.
"""

from supertree.core.git.abc import BranchKind


class SupertreeError(Exception):
    """Base class for expected, user-facing failures."""


class RootResolutionError(SupertreeError):
    """The repository is neither bare nor a linked worktree."""


class InvalidBranchNameError(SupertreeError):
    """The requested branch name is not a valid git reference name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"'{name}' is not a valid branch name")
        self.name = name


class RefNotFoundError(SupertreeError):
    """The local or remote source branch does not exist."""

    def __init__(self, kind: BranchKind, name: str) -> None:
        super().__init__(f"{kind.label} ref branch '{name}' not found")
        self.kind = kind
        self.name = name


class BranchCreationError(SupertreeError):
    """Git refused to create the new local branch."""


class UpstreamSetError(SupertreeError):
    """Git refused to configure the upstream of the new branch."""


class WorktreeRegistrationError(SupertreeError):
    """Git refused to register the new worktree."""


class TaskError(SupertreeError):
    """A post-creation task failed; remaining tasks were not run."""

    def __init__(self, index: int | None, description: str, reason: str) -> None:
        if index is None:
            super().__init__(f"Failed to {description}: {reason}")
        else:
            super().__init__(f"Task {index + 1} ({description}) failed: {reason}")
        self.index = index
        self.description = description


class ConfigError(SupertreeError):
    """The configuration file could not be read, parsed or written."""


class WorktreeInvariantError(RuntimeError):
    """Git registered the worktree somewhere other than requested."""
