"""Tests for the subprocess wrapper used by RealGit."""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from supertree.core.subprocess import run_subprocess_with_context


def test_success_returns_completed_process_with_text_capture() -> None:
    with patch("supertree.core.subprocess.subprocess.run") as mock_run:
        mock_result = Mock(spec=subprocess.CompletedProcess)
        mock_result.returncode = 0
        mock_run.return_value = mock_result

        result = run_subprocess_with_context(
            ["git", "branch", "feature", "abc123"],
            operation_context="create branch 'feature' at abc123",
            cwd=Path("/work/project/master"),
        )

    assert result is mock_result
    mock_run.assert_called_once_with(
        ["git", "branch", "feature", "abc123"],
        cwd=Path("/work/project/master"),
        capture_output=True,
        text=True,
        encoding="utf-8",
        check=True,
    )


def test_failure_message_carries_context_command_and_stderr() -> None:
    error = subprocess.CalledProcessError(
        returncode=128,
        cmd=["git", "worktree", "add", "/work/project/feature", "feature"],
        stderr="fatal: '/work/project/feature' already exists\n",
    )
    with patch("supertree.core.subprocess.subprocess.run", side_effect=error):
        with pytest.raises(RuntimeError) as exc_info:
            run_subprocess_with_context(
                ["git", "worktree", "add", "/work/project/feature", "feature"],
                operation_context="add worktree 'feature'",
            )

    message = str(exc_info.value)
    assert message.startswith("Failed to add worktree 'feature'")
    assert "Command: git worktree add /work/project/feature feature" in message
    assert "Exit code: 128" in message
    assert "stderr: fatal: '/work/project/feature' already exists" in message
    assert exc_info.value.__cause__ is error


def test_blank_output_is_omitted_from_message() -> None:
    error = subprocess.CalledProcessError(returncode=1, cmd=["git"], output="", stderr="  \n")
    with patch("supertree.core.subprocess.subprocess.run", side_effect=error):
        with pytest.raises(RuntimeError) as exc_info:
            run_subprocess_with_context(["git"], operation_context="run git")

    assert "stdout:" not in str(exc_info.value)
    assert "stderr:" not in str(exc_info.value)


def test_missing_binary_is_reported() -> None:
    with pytest.raises(RuntimeError, match="Command not found while trying to run tool"):
        run_subprocess_with_context(
            ["supertree-no-such-binary", "--version"], operation_context="run tool"
        )


def test_check_false_returns_failed_result() -> None:
    result = run_subprocess_with_context(
        ["git", "rev-parse", "--verify", "--quiet", "refs/heads/does-not-exist"],
        operation_context="look up branch",
        cwd=Path("/"),
        check=False,
    )

    assert result.returncode != 0
