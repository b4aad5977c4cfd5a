import re

import click

from supertree.cli.core import discover_repo
from supertree.cli.ensure import reported_errors
from supertree.cli.output import machine_output
from supertree.core.context import SupertreeContext
from supertree.core.worktree_creation import WorktreeRequest, create_worktree, select_project

_FLAG_CLUSTER = re.compile(r"-[sr]+")


class AttachedRemoteCommand(click.Command):
    """Command whose --remote value can only be given as --remote=NAME.

    A bare --remote (or -r) never consumes the following token, so
    `new --remote feature` creates `feature` from the remote branch of the same name.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        return super().parse_args(ctx, attach_remote_values(args))


def attach_remote_values(args: list[str]) -> list[str]:
    """Rewrite bare -r/--remote tokens to --remote= so click never reads ahead.

    -r=NAME becomes --remote=NAME; clusters such as -sr are split. Tokens after a
    literal '--' are left alone.
    """
    normalized: list[str] = []
    for index, arg in enumerate(args):
        if arg == "--":
            normalized.extend(args[index:])
            break
        if arg == "--remote":
            normalized.append("--remote=")
        elif arg.startswith("-r="):
            normalized.append("--remote=" + arg[len("-r=") :])
        elif _FLAG_CLUSTER.fullmatch(arg):
            normalized.extend("--remote=" if flag == "r" else "-s" for flag in arg[1:])
        else:
            normalized.append(arg)
    return normalized


@click.command("new", cls=AttachedRemoteCommand)
@click.argument("branch_name", metavar="BRANCH_NAME")
@click.option(
    "-s",
    "--skip-tasks",
    is_flag=True,
    help="Skip running the project's tasks in the new worktree.",
)
@click.option(
    "-r",
    "--remote",
    "remote_branch",
    default=None,
    metavar="[=REMOTE_BRANCH]",
    help=(
        "Base the worktree on a branch of the primary remote. "
        "Without a value, the remote branch named BRANCH_NAME is used."
    ),
)
@click.pass_obj
def new_cmd(
    ctx: SupertreeContext,
    branch_name: str,
    skip_tasks: bool,
    remote_branch: str | None,
) -> None:
    """Create a worktree for BRANCH_NAME and run the project's tasks in it.

    The worktree is placed next to the other worktrees of the repository, at
    <root>/BRANCH_NAME. Creates the default config file if it is missing.
    """
    with reported_errors():
        root_config = ctx.config_store.load_or_create()
        repo = discover_repo(ctx)
        project_config = select_project(root_config, repo)

        request = WorktreeRequest(
            branch_name=branch_name,
            remote_hint=remote_branch,
            skip_tasks=skip_tasks,
        )
        worktree_path = create_worktree(
            ctx.git, ctx.shell, repo, request, project_config, ctx.env
        )

    machine_output(str(worktree_path))
