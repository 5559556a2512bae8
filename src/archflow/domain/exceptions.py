"""
Domain exceptions for process execution.

Processes report domain-level failures (missing bounded contexts, failed
syntax validation) as `success: False` results. These exceptions are for
failures of the run itself.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from archflow.domain.models import (
        BreakpointDecision,
        BreakpointRequest,
        TaskDefinition,
    )


class ProcessError(Exception):
    """Base class for process execution errors."""


class TaskFailed(ProcessError):
    """
    Raised when a task's executor fails.

    The original exception is kept as `cause` and chained.
    """

    def __init__(self, task: "TaskDefinition", cause: Exception):
        super().__init__(f"Task '{task.task_id}' ({task.effect_id}) failed: {cause}")
        self.task = task
        self.cause = cause


class OutputSchemaViolation(ProcessError):
    """Raised when agent output still violates its schema after all attempts."""

    def __init__(self, task: "TaskDefinition", errors: list[str], attempts: int):
        """
        Args:
            task: The task whose output was rejected
            errors: Validation messages from the final attempt
            attempts: Number of attempts made
        """
        summary = "; ".join(errors[:5])
        super().__init__(
            f"Task '{task.task_id}' output violated its schema after "
            f"{attempts} attempt(s): {summary}"
        )
        self.task = task
        self.errors = errors
        self.attempts = attempts


class BreakpointRejected(ProcessError):
    """
    Raised when a reviewer declines a breakpoint.

    This halts the process; the runner surfaces it as a REJECTED run.
    """

    def __init__(self, request: "BreakpointRequest", decision: "BreakpointDecision"):
        reason = f": {decision.feedback}" if decision.feedback else ""
        super().__init__(f"Breakpoint '{request.title}' rejected{reason}")
        self.request = request
        self.decision = decision


class ProcessNotFound(ProcessError, KeyError):
    """Raised when a process id is not registered."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class InvalidProcessInputs(ProcessError):
    """Raised when process inputs fail validation."""


class AgentResponseError(Exception):
    """Raised when an agent reply cannot be interpreted as a JSON object."""
