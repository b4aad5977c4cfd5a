"""Tests for the completion command."""

from click.testing import CliRunner

from supertree.cli.cli import cli
from supertree.core.context import SupertreeContext


def test_completion_bash_emits_script() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["completion", "bash"], obj=SupertreeContext.for_test())

    assert result.exit_code == 0, result.output
    assert "_SUPERTREE_COMPLETE=bash_complete" in result.stdout


def test_completion_fish_emits_script() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["completion", "fish"], obj=SupertreeContext.for_test())

    assert result.exit_code == 0, result.output
    assert "_SUPERTREE_COMPLETE=fish_complete" in result.stdout


def test_completion_rejects_unknown_shell() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["completion", "tcsh"], obj=SupertreeContext.for_test())

    assert result.exit_code == 2


def test_help_lists_commands() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["-h"], obj=SupertreeContext.for_test())

    assert result.exit_code == 0
    for command in ("new", "config", "completion"):
        assert command in result.output
