import click

from supertree.cli.ensure import reported_errors
from supertree.cli.output import machine_output, user_output
from supertree.core.config_store import render_config
from supertree.core.context import SupertreeContext


@click.command("config")
@click.option(
    "--show",
    is_flag=True,
    help="Print the effective configuration as YAML on stdout.",
)
@click.pass_obj
def config_cmd(ctx: SupertreeContext, show: bool) -> None:
    """Create the default config file if it is missing, then exit."""
    store = ctx.config_store

    with reported_errors():
        existed = store.exists()
        config = store.load_or_create()

    if existed:
        user_output(f"Config file: {store.path()}")
    else:
        user_output(f"Created default config at {store.path()}")

    if show:
        machine_output(render_config(config), nl=False)
