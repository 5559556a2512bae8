"""
Abstract interfaces for the process runtime (Ports).

Infrastructure adapters implement these; the application layer depends
only on the abstractions.
"""

from abc import ABC, abstractmethod
from typing import Any

from archflow.domain.models import (
    BreakpointDecision,
    BreakpointRequest,
    RunEvent,
    RunEventType,
    TaskDefinition,
)


class TaskExecutorInterface(ABC):
    """Port for executing a single task definition."""

    @abstractmethod
    def execute(
        self, task: TaskDefinition, args: dict[str, Any], feedback: str | None = None
    ) -> dict[str, Any]:
        """
        Execute a task and return its JSON result.

        Args:
            task: The task definition to run
            args: Arguments the task was built from
            feedback: Schema feedback from a rejected previous attempt, if any

        Returns:
            The task's result object
        """


class BreakpointHandlerInterface(ABC):
    """Port for human-approval gates."""

    @abstractmethod
    def decide(self, request: BreakpointRequest) -> BreakpointDecision:
        """
        Decide whether the process may continue past a breakpoint.

        Args:
            request: The breakpoint raised by the process

        Returns:
            The reviewer's decision
        """


class TaskJournalInterface(ABC):
    """Port for persisting task I/O, breakpoint decisions and events for a run."""

    @abstractmethod
    def record_task(self, task: TaskDefinition, args: dict[str, Any]) -> None:
        """Persist a task definition and its input arguments."""

    @abstractmethod
    def record_result(self, task: TaskDefinition, result: dict[str, Any]) -> None:
        """Persist a task's validated result."""

    @abstractmethod
    def load_result(self, effect_id: str) -> dict[str, Any] | None:
        """Return the stored result for an effect id, or None if absent."""

    @abstractmethod
    def record_breakpoint(
        self, request: BreakpointRequest, decision: BreakpointDecision
    ) -> None:
        """Persist a breakpoint and the decision taken on it."""

    @abstractmethod
    def load_breakpoint(self, breakpoint_id: str) -> BreakpointDecision | None:
        """Return the stored decision for a breakpoint id, or None if absent."""

    @abstractmethod
    def append_event(self, event: RunEvent) -> None:
        """Append an event to the run's journal."""

    @abstractmethod
    def events(self, event_type: RunEventType | None = None) -> list[RunEvent]:
        """Return journaled events in order, optionally filtered by type."""
