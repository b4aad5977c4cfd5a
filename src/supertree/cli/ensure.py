"""CLI error handling utilities with styled output.

This module provides the Ensure class for asserting invariants in CLI commands
with consistent, user-friendly error messages. All errors use red "Error:" prefix
for visual consistency.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn, TypeVar

import click

from supertree.cli.output import user_output
from supertree.core.errors import SupertreeError

T = TypeVar("T")


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Ensure value is not None, otherwise output styled error and exit.

        Returns value with its type narrowed from `T | None` to `T`.

        Raises:
            SystemExit: If value is None (with exit code 1)
        """
        if value is None:
            fail(error_message)
        return value


def fail(error_message: str) -> NoReturn:
    """Output a styled error and exit with status 1."""
    user_output(click.style("Error: ", fg="red") + error_message)
    raise SystemExit(1)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn SupertreeError raised inside the block into a styled error and exit 1."""
    try:
        yield
    except SupertreeError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e
