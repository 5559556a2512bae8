"""Tests for ShellExecutor."""

import pytest

from archflow.domain.models import TaskContext, TaskDefinition
from archflow.domain.tasks import agent_task, shell_task
from archflow.infrastructure.agents.shell import ShellExecutor


def _shell(command: str, timeout: float = 10) -> TaskDefinition:
    return shell_task(
        TaskContext(
            task_id="syntax-validation", effect_id="syntax-validation-abc", run_id="r"
        ),
        title="Syntax Validation",
        command=command,
        timeout=timeout,
    )


class TestShellExecutor:
    """Tests for running shell tasks."""

    def test_successful_command(self) -> None:
        """Exit code 0 reports success with captured stdout."""
        result = ShellExecutor().execute(_shell("echo validated"), {})

        assert result["success"] is True
        assert result["valid"] is True
        assert result["exitCode"] == 0
        assert result["stdout"].strip() == "validated"
        assert result["errors"] == []
        assert result["artifacts"] == []

    def test_failing_command_collects_stderr(self) -> None:
        """A non-zero exit reports failure with stderr lines as errors."""
        result = ShellExecutor().execute(
            _shell("echo 'Error: bad block' >&2; exit 3"), {}
        )

        assert result["success"] is False
        assert result["exitCode"] == 3
        assert result["errors"] == ["Error: bad block"]

    def test_failing_command_without_stderr(self) -> None:
        """Without stderr the exit code becomes the error."""
        result = ShellExecutor().execute(_shell("exit 2"), {})

        assert result["errors"] == ["Exit code 2"]

    def test_timeout(self) -> None:
        """A command exceeding its timeout is reported, not raised."""
        result = ShellExecutor().execute(_shell("sleep 5", timeout=0.2), {})

        assert result["success"] is False
        assert result["exitCode"] is None
        assert result["errors"][0].startswith("Timed out")

    def test_runs_in_cwd(self, tmp_path) -> None:  # noqa: ANN001
        """Commands run in the configured working directory."""
        (tmp_path / "main.tf").write_text("")

        result = ShellExecutor(cwd=tmp_path).execute(_shell("ls"), {})

        assert "main.tf" in result["stdout"]

    def test_rejects_agent_task(self) -> None:
        """Tasks without a shell spec are refused."""
        task = agent_task(
            TaskContext(task_id="x", effect_id="x-abc", run_id="r"),
            title="x",
            role="r",
            task="t",
            context={},
            instructions=[],
            output_format="",
            output_schema={},
        )

        with pytest.raises(ValueError, match="is not a shell task"):
            ShellExecutor().execute(task, {})
