"""
archflow: multi-phase software-architecture processes.

A process sequences calls to LLM-backed agents, passes structured JSON
between phases and pauses at human-approval breakpoints. Task results
are journaled under deterministic effect ids, so an interrupted run
resumes where it stopped.

Example:
    from archflow import ProcessRunner
    from archflow.infrastructure import AutoApproveHandler, OpenAIAgentExecutor

    runner = ProcessRunner(
        agent=OpenAIAgentExecutor(model="qwen2.5:14b"),
        breakpoints=AutoApproveHandler(),
    )
    result = runner.run(
        "software-architecture/event-storming",
        {"domain": "Online checkout", "scope": "Payments and fulfilment"},
    )
"""

# Application layer (orchestration)
from archflow.application.context import ParallelRunner, ProcessContext
from archflow.application.process import ProcessDefinition, ProcessInputs, process
from archflow.application.runner import ProcessRunner

# Domain exceptions
from archflow.domain.exceptions import (
    AgentResponseError,
    BreakpointRejected,
    InvalidProcessInputs,
    OutputSchemaViolation,
    ProcessError,
    ProcessNotFound,
    TaskFailed,
)

# Domain interfaces (for type hints and custom implementations)
from archflow.domain.interfaces import (
    BreakpointHandlerInterface,
    TaskExecutorInterface,
    TaskJournalInterface,
)
from archflow.domain.models import (
    BreakpointDecision,
    BreakpointRequest,
    ProcessMetadata,
    ProcessRunResult,
    RunStatus,
    TaskDefinition,
)

# Task definitions
from archflow.domain.tasks import TaskTemplate, agent_task, define_task, shell_task

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Application
    "ParallelRunner",
    "ProcessContext",
    "ProcessDefinition",
    "ProcessInputs",
    "ProcessRunner",
    "process",
    # Models
    "BreakpointDecision",
    "BreakpointRequest",
    "ProcessMetadata",
    "ProcessRunResult",
    "RunStatus",
    "TaskDefinition",
    # Tasks
    "TaskTemplate",
    "agent_task",
    "define_task",
    "shell_task",
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
