"""Tests for domain models."""

import pytest

from archflow.domain.models import (
    AgentSpec,
    BreakpointRequest,
    ProcessRunResult,
    RunEvent,
    RunEventType,
    RunStatus,
    ShellSpec,
    TaskDefinition,
    TaskIO,
    TaskKind,
)
from archflow.domain.prompts import AgentPrompt


class TestTaskIO:
    """Tests for TaskIO."""

    def test_for_effect_layout(self) -> None:
        """Input and result live under tasks/{effectId}/."""
        io = TaskIO.for_effect("summarize-0123456789ab")

        assert io.input_json_path == "tasks/summarize-0123456789ab/input.json"
        assert io.output_json_path == "tasks/summarize-0123456789ab/result.json"


class TestTaskDefinition:
    """Tests for TaskDefinition serialization."""

    def test_agent_task_to_dict(self) -> None:
        """Agent tasks serialize with camelCase keys and their prompt."""
        task = TaskDefinition(
            task_id="summarize",
            kind=TaskKind.AGENT,
            title="Summarize",
            effect_id="summarize-abc",
            io=TaskIO.for_effect("summarize-abc"),
            agent=AgentSpec(
                name="general-purpose",
                prompt=AgentPrompt(
                    role="Writer", task="Summarize", context={"a": 1}, instructions=(
                        "x",
                    )
                ),
                output_schema={"type": "object"},
            ),
            labels=("agent",),
        )

        data = task.to_dict()

        assert data["taskId"] == "summarize"
        assert data["kind"] == "agent"
        assert data["effectId"] == "summarize-abc"
        assert data["io"]["outputJsonPath"] == "tasks/summarize-abc/result.json"
        assert data["labels"] == ["agent"]
        assert data["agent"]["name"] == "general-purpose"
        assert data["agent"]["prompt"]["instructions"] == ["x"]
        assert data["agent"]["outputSchema"] == {"type": "object"}
        assert "shell" not in data

    def test_shell_task_to_dict(self) -> None:
        """Shell tasks serialize their command and timeout."""
        task = TaskDefinition(
            task_id="echo",
            kind=TaskKind.SHELL,
            title="Echo",
            effect_id="echo-abc",
            io=TaskIO.for_effect("echo-abc"),
            shell=ShellSpec(command="echo hi", timeout=5),
        )

        data = task.to_dict()

        assert data["kind"] == "shell"
        assert data["shell"] == {"command": "echo hi", "timeout": 5}
        assert "agent" not in data


class TestBreakpointRequest:
    """Tests for BreakpointRequest."""

    def test_files_from_context(self) -> None:
        """files reads the context's file references."""
        request = BreakpointRequest(
            breakpoint_id="bp-1",
            title="Review",
            question="Approve?",
            context={"runId": "run-1", "files": [{"path": "a.md"}]},
        )

        assert request.files == [{"path": "a.md"}]

    def test_files_default_empty(self) -> None:
        """files is empty when the context has none."""
        request = BreakpointRequest(
            breakpoint_id="bp-1", title="Review", question="Approve?", context={}
        )

        assert request.files == []


class TestProcessRunResult:
    """Tests for ProcessRunResult."""

    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (RunStatus.COMPLETED, True),
            (RunStatus.FAILED, False),
            (RunStatus.REJECTED, False),
        ],
    )
    def test_success_follows_status(self, status: RunStatus, expected: bool) -> None:
        """Only completed runs are successful."""
        result = ProcessRunResult(run_id="r", process_id="p", status=status)

        assert result.success is expected


class TestRunEvent:
    """Tests for RunEvent serialization."""

    def test_from_dict_restores_event(self) -> None:
        """An event survives to_dict/from_dict."""
        event = RunEvent(
            event_id="e-1",
            event_type=RunEventType.TASK_PASS,
            run_id="run-1",
            effect_id="summarize-abc",
            summary="ok",
            created_at="2026-01-01T00:00:00+00:00",
        )

        assert RunEvent.from_dict(event.to_dict()) == event

    def test_from_dict_defaults(self) -> None:
        """Optional fields default when absent."""
        event = RunEvent.from_dict(
            {"event_id": "e-2", "event_type": "LOG", "run_id": "run-1"}
        )

        assert event.event_type == RunEventType.LOG
        assert event.effect_id is None
        assert event.summary == ""
