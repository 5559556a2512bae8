"""
Mock agent executor for testing without an LLM.

Returns predefined results keyed by task id.
"""

import copy
from collections.abc import Callable
from threading import Lock
from typing import Any

from archflow.domain.interfaces import TaskExecutorInterface
from archflow.domain.models import TaskDefinition

MockResponder = Callable[[TaskDefinition, dict[str, Any]], dict[str, Any]]
MockResponse = dict[str, Any] | list[dict[str, Any]] | MockResponder


class MockAgentExecutor(TaskExecutorInterface):
    """Returns predefined results for testing."""

    def __init__(self, responses: dict[str, MockResponse]):
        """
        Args:
            responses: Maps task id to a result dict (returned on every call),
                a list of result dicts (returned in sequence), or a callable
                taking (task, args) and returning a result dict
        """
        self._responses = responses
        self._positions: dict[str, int] = {}
        self._calls: list[tuple[str, dict[str, Any]]] = []
        self._lock = Lock()

    def execute(
        self, task: TaskDefinition, args: dict[str, Any], feedback: str | None = None
    ) -> dict[str, Any]:
        """Return the next predefined result for the task."""
        with self._lock:
            self._calls.append((task.task_id, args))
            if task.task_id not in self._responses:
                raise RuntimeError(
                    f"MockAgentExecutor has no response for '{task.task_id}'"
                )
            response = self._responses[task.task_id]

            if isinstance(response, list):
                position = self._positions.get(task.task_id, 0)
                if position >= len(response):
                    raise RuntimeError(
                        f"MockAgentExecutor exhausted responses for '{task.task_id}'"
                    )
                self._positions[task.task_id] = position + 1
                return copy.deepcopy(response[position])

        if callable(response):
            return response(task, args)
        return copy.deepcopy(response)

    @property
    def call_count(self) -> int:
        """Number of times execute() has been called."""
        return len(self._calls)

    @property
    def calls(self) -> list[tuple[str, dict[str, Any]]]:
        """(task_id, args) for every call, in order."""
        return list(self._calls)

    def calls_for(self, task_id: str) -> list[dict[str, Any]]:
        return [args for called_id, args in self._calls if called_id == task_id]

    def reset(self) -> None:
        """Forget calls and rewind sequences to reuse responses."""
        self._positions.clear()
        self._calls.clear()
