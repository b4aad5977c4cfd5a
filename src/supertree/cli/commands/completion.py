import click
from click.shell_completion import get_completion_class

from supertree.cli.ensure import Ensure

COMPLETE_VAR = "_SUPERTREE_COMPLETE"


@click.command("completion")
@click.argument("shell", type=click.Choice(["bash", "zsh", "fish"]))
@click.pass_context
def completion_cmd(ctx: click.Context, shell: str) -> None:
    """Print the shell completion script for SHELL.

    \b
    Examples:
      supertree completion bash > ~/.local/share/bash-completion/completions/supertree
      supertree completion fish > ~/.config/fish/completions/supertree.fish
    """
    root = ctx.find_root()
    completion_class = Ensure.not_none(
        get_completion_class(shell), f"No completion support for {shell}"
    )

    prog_name = root.info_name or "supertree"
    completion = completion_class(root.command, {}, prog_name, COMPLETE_VAR)
    click.echo(completion.source())
