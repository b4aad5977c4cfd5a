import logging
import os

import click

from supertree.cli.commands.completion import completion_cmd
from supertree.cli.commands.config import config_cmd
from supertree.cli.commands.new import new_cmd
from supertree.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_ENV_VAR = "SUPERTREE_DEBUG"


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="supertree")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """A CLI to improve the DX around git worktree."""
    if os.environ.get(DEBUG_ENV_VAR):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()


cli.add_command(new_cmd)
cli.add_command(config_cmd)
cli.add_command(completion_cmd)


def main() -> None:
    """CLI entry point used by the `supertree` console script."""
    cli()
