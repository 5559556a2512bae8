"""Tests for MockAgentExecutor."""

from typing import Any

import pytest

from archflow.domain.models import TaskContext, TaskDefinition
from archflow.domain.tasks import agent_task
from archflow.infrastructure.agents.mock import MockAgentExecutor


def _task(task_id: str) -> TaskDefinition:
    return agent_task(
        TaskContext(task_id=task_id, effect_id=f"{task_id}-abc", run_id="run-1"),
        title=task_id,
        role="r",
        task="t",
        context={},
        instructions=[],
        output_format="",
        output_schema={"type": "object"},
    )


class TestMockAgentExecutor:
    """Tests for predefined mock responses."""

    def test_dict_response_every_call(self) -> None:
        """A dict response is returned on every call."""
        mock = MockAgentExecutor({"profiling": {"bottlenecks": []}})

        first = mock.execute(_task("profiling"), {})
        second = mock.execute(_task("profiling"), {})

        assert first == second == {"bottlenecks": []}

    def test_dict_response_is_copied(self) -> None:
        """Callers cannot mutate the stored response."""
        mock = MockAgentExecutor({"profiling": {"bottlenecks": []}})

        mock.execute(_task("profiling"), {})["bottlenecks"].append("db")

        assert mock.execute(_task("profiling"), {}) == {"bottlenecks": []}

    def test_list_response_in_sequence(self) -> None:
        """A list is consumed in order and raises when exhausted."""
        mock = MockAgentExecutor(
            {"validation": [{"improvementPercentage": 10}, {"improvementPercentage": 20}]}
        )

        assert mock.execute(_task("validation"), {})["improvementPercentage"] == 10
        assert mock.execute(_task("validation"), {})["improvementPercentage"] == 20
        with pytest.raises(RuntimeError, match="exhausted"):
            mock.execute(_task("validation"), {})

    def test_callable_response(self) -> None:
        """A callable receives the task and its args."""

        def respond(task: TaskDefinition, args: dict[str, Any]) -> dict[str, Any]:
            return {"taskId": task.task_id, "iteration": args["iteration"]}

        mock = MockAgentExecutor({"implementation": respond})

        result = mock.execute(_task("implementation"), {"iteration": 2})

        assert result == {"taskId": "implementation", "iteration": 2}

    def test_unknown_task_raises(self) -> None:
        """A task without a response raises RuntimeError."""
        with pytest.raises(RuntimeError, match="no response for 'unknown'"):
            MockAgentExecutor({}).execute(_task("unknown"), {})

    def test_records_calls(self) -> None:
        """Calls are recorded in order and can be filtered by task id."""
        mock = MockAgentExecutor({"a": {}, "b": {}})

        mock.execute(_task("a"), {"n": 1})
        mock.execute(_task("b"), {"n": 2})
        mock.execute(_task("a"), {"n": 3})

        assert mock.call_count == 3
        assert [task_id for task_id, _ in mock.calls] == ["a", "b", "a"]
        assert mock.calls_for("a") == [{"n": 1}, {"n": 3}]

    def test_reset(self) -> None:
        """reset() forgets calls and rewinds sequences."""
        mock = MockAgentExecutor({"a": [{"n": 1}]})
        mock.execute(_task("a"), {})

        mock.reset()

        assert mock.call_count == 0
        assert mock.execute(_task("a"), {}) == {"n": 1}
