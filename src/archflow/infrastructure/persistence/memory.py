"""
In-memory implementation of the task journal.

Useful for testing and ephemeral runs.
"""

import copy
from threading import Lock
from typing import Any

from archflow.domain.interfaces import TaskJournalInterface
from archflow.domain.models import (
    BreakpointDecision,
    BreakpointRequest,
    RunEvent,
    RunEventType,
    TaskDefinition,
)


class InMemoryTaskJournal(TaskJournalInterface):
    """Simple in-memory journal for testing."""

    def __init__(self) -> None:
        self.tasks: dict[str, tuple[TaskDefinition, dict[str, Any]]] = {}
        self._results: dict[str, dict[str, Any]] = {}
        self._breakpoints: dict[str, tuple[BreakpointRequest, BreakpointDecision]] = {}
        self._events: list[RunEvent] = []
        self._lock = Lock()

    def record_task(self, task: TaskDefinition, args: dict[str, Any]) -> None:
        with self._lock:
            self.tasks[task.effect_id] = (task, copy.deepcopy(args))

    def record_result(self, task: TaskDefinition, result: dict[str, Any]) -> None:
        with self._lock:
            self._results[task.effect_id] = copy.deepcopy(result)

    def load_result(self, effect_id: str) -> dict[str, Any] | None:
        result = self._results.get(effect_id)
        return copy.deepcopy(result) if result is not None else None

    def record_breakpoint(
        self, request: BreakpointRequest, decision: BreakpointDecision
    ) -> None:
        with self._lock:
            self._breakpoints[request.breakpoint_id] = (request, decision)

    def load_breakpoint(self, breakpoint_id: str) -> BreakpointDecision | None:
        entry = self._breakpoints.get(breakpoint_id)
        return entry[1] if entry else None

    def append_event(self, event: RunEvent) -> None:
        with self._lock:
            self._events.append(event)

    def events(self, event_type: RunEventType | None = None) -> list[RunEvent]:
        return [
            e for e in self._events if event_type is None or e.event_type == event_type
        ]
