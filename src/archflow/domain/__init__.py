"""
Domain layer for archflow.

Contains task, breakpoint and run models with no infrastructure
dependencies.
"""

from archflow.domain.artifacts import collect_artifacts, file_refs
from archflow.domain.exceptions import (
    AgentResponseError,
    BreakpointRejected,
    InvalidProcessInputs,
    OutputSchemaViolation,
    ProcessError,
    ProcessNotFound,
    TaskFailed,
)
from archflow.domain.interfaces import (
    BreakpointHandlerInterface,
    TaskExecutorInterface,
    TaskJournalInterface,
)
from archflow.domain.models import (
    AgentSpec,
    BreakpointDecision,
    BreakpointRequest,
    ProcessMetadata,
    ProcessRunResult,
    RunEvent,
    RunEventType,
    RunStatus,
    ShellSpec,
    TaskContext,
    TaskDefinition,
    TaskIO,
    TaskKind,
)
from archflow.domain.prompts import AgentPrompt
from archflow.domain.scoring import average, quality_threshold, weighted_score
from archflow.domain.tasks import TaskTemplate, agent_task, define_task, shell_task

__all__ = [
    # Models
    "AgentSpec",
    "BreakpointDecision",
    "BreakpointRequest",
    "ProcessMetadata",
    "ProcessRunResult",
    "RunEvent",
    "RunEventType",
    "RunStatus",
    "ShellSpec",
    "TaskContext",
    "TaskDefinition",
    "TaskIO",
    "TaskKind",
    # Prompts and tasks
    "AgentPrompt",
    "TaskTemplate",
    "agent_task",
    "define_task",
    "shell_task",
    # Helpers
    "average",
    "collect_artifacts",
    "file_refs",
    "quality_threshold",
    "weighted_score",
    # Interfaces
    "BreakpointHandlerInterface",
    "TaskExecutorInterface",
    "TaskJournalInterface",
    # Exceptions
    "AgentResponseError",
    "BreakpointRejected",
    "InvalidProcessInputs",
    "OutputSchemaViolation",
    "ProcessError",
    "ProcessNotFound",
    "TaskFailed",
]
