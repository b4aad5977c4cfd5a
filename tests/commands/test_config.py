"""Tests for the config command."""

from pathlib import Path

import yaml
from click.testing import CliRunner

from supertree.cli.cli import cli
from supertree.core.config_store import (
    FakeConfigStore,
    ProjectConfig,
    RealConfigStore,
    RootConfig,
    ShellTask,
)
from supertree.core.context import SupertreeContext


def test_config_creates_default_file_when_missing() -> None:
    runner = CliRunner()
    config_path = Path("/home/dev/.config/supertree/config.yaml")
    store = FakeConfigStore(config=None, config_path=config_path)
    test_ctx = SupertreeContext.for_test(config_store=store)

    result = runner.invoke(cli, ["config"], obj=test_ctx)

    assert result.exit_code == 0, result.output
    assert "Created default config at /home/dev/.config/supertree/config.yaml" in result.stderr
    assert store.saved_configs == [RootConfig()]
    assert result.stdout == ""


def test_config_reports_existing_file_without_rewriting() -> None:
    runner = CliRunner()
    store = FakeConfigStore(config=RootConfig())
    test_ctx = SupertreeContext.for_test(config_store=store)

    result = runner.invoke(cli, ["config"], obj=test_ctx)

    assert result.exit_code == 0, result.output
    assert "Config file: /test/supertree/config.yaml" in result.stderr
    assert store.saved_configs == []


def test_config_show_prints_yaml_on_stdout() -> None:
    runner = CliRunner()
    config = RootConfig(
        projects={"webapp": ProjectConfig(primary_branch="main", tasks=(ShellTask(cmd="make"),))}
    )
    test_ctx = SupertreeContext.for_test(config_store=FakeConfigStore(config=config))

    result = runner.invoke(cli, ["config", "--show"], obj=test_ctx)

    assert result.exit_code == 0, result.output
    data = yaml.safe_load(result.stdout)
    assert data["version"] == "1"
    assert data["projects"]["webapp"]["primary_branch"] == "main"
    assert data["projects"]["webapp"]["tasks"] == [{"type": "Shell", "cmd": "make"}]


def test_config_writes_real_file(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = tmp_path / "supertree" / "config.yaml"
    test_ctx = SupertreeContext.for_test(config_store=RealConfigStore(config_path))

    result = runner.invoke(cli, ["config"], obj=test_ctx)

    assert result.exit_code == 0, result.output
    assert yaml.safe_load(config_path.read_text(encoding="utf-8")) == {
        "version": "1",
        "default": {"primary_branch": "master", "primary_remote": "origin", "tasks": []},
        "projects": {},
    }


def test_config_reports_invalid_file(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = tmp_path / "config.yaml"
    config_path.write_text("default:\n  primary_brnach: main\n", encoding="utf-8")
    test_ctx = SupertreeContext.for_test(config_store=RealConfigStore(config_path))

    result = runner.invoke(cli, ["config"], obj=test_ctx)

    assert result.exit_code == 1
    assert "Error: " in result.stderr
    assert "Invalid config file" in result.stderr
