"""
Domain models for process execution.

These are pure data structures describing task invocations, breakpoints
and run outcomes. All models are frozen dataclasses; the JSON flowing
between phases stays as plain dicts.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from archflow.domain.prompts import AgentPrompt

# =============================================================================
# TASK MODEL
# =============================================================================


class TaskKind(Enum):
    """How a task is executed."""

    AGENT = "agent"  # Delegated to an LLM-backed agent
    SHELL = "shell"  # Run as a local command


@dataclass(frozen=True)
class TaskIO:
    """File locations for a task's input and result JSON."""

    input_json_path: str
    output_json_path: str

    @classmethod
    def for_effect(cls, effect_id: str) -> "TaskIO":
        return cls(
            input_json_path=f"tasks/{effect_id}/input.json",
            output_json_path=f"tasks/{effect_id}/result.json",
        )


@dataclass(frozen=True)
class AgentSpec:
    """Agent half of a task definition."""

    name: str  # e.g., "general-purpose"
    prompt: AgentPrompt
    output_schema: dict[str, Any]


@dataclass(frozen=True)
class ShellSpec:
    """Shell half of a task definition."""

    command: str
    timeout: float = 300.0  # seconds


@dataclass(frozen=True)
class TaskContext:
    """Identity handed to a task builder."""

    task_id: str
    effect_id: str
    run_id: str


@dataclass(frozen=True)
class TaskDefinition:
    """
    One concrete task invocation, built from a template and its arguments.

    Exactly one of `agent` or `shell` is set, matching `kind`.
    """

    task_id: str  # e.g., "system-context-analysis"
    kind: TaskKind
    title: str
    effect_id: str
    io: TaskIO
    agent: AgentSpec | None = None
    shell: ShellSpec | None = None
    labels: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the task journal."""
        data: dict[str, Any] = {
            "taskId": self.task_id,
            "kind": self.kind.value,
            "title": self.title,
            "effectId": self.effect_id,
            "io": {
                "inputJsonPath": self.io.input_json_path,
                "outputJsonPath": self.io.output_json_path,
            },
            "labels": list(self.labels),
        }
        if self.agent is not None:
            data["agent"] = {
                "name": self.agent.name,
                "prompt": {
                    "role": self.agent.prompt.role,
                    "task": self.agent.prompt.task,
                    "context": self.agent.prompt.context,
                    "instructions": list(self.agent.prompt.instructions),
                    "outputFormat": self.agent.prompt.output_format,
                },
                "outputSchema": self.agent.output_schema,
            }
        if self.shell is not None:
            data["shell"] = {
                "command": self.shell.command,
                "timeout": self.shell.timeout,
            }
        return data


# =============================================================================
# BREAKPOINT MODEL
# =============================================================================


@dataclass(frozen=True)
class BreakpointRequest:
    """A human-approval gate raised by a process."""

    breakpoint_id: str
    title: str
    question: str
    context: dict[str, Any]  # runId, files, summary, extras

    @property
    def files(self) -> list[dict[str, Any]]:
        files: list[dict[str, Any]] = self.context.get("files", [])
        return files


@dataclass(frozen=True)
class BreakpointDecision:
    """Outcome of a breakpoint."""

    approved: bool
    feedback: str = ""
    responder: str = ""


# =============================================================================
# RUN MODEL
# =============================================================================


class RunStatus(Enum):
    """Outcome of a process run."""

    COMPLETED = "completed"
    FAILED = "failed"
    REJECTED = "rejected"  # A breakpoint was declined


@dataclass(frozen=True)
class ProcessRunResult:
    """Result of running a process to completion or failure."""

    run_id: str
    process_id: str
    status: RunStatus
    output: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.status == RunStatus.COMPLETED


@dataclass(frozen=True)
class ProcessMetadata:
    """Descriptive metadata for a registered process."""

    process_id: str
    description: str
    inputs: tuple[str, ...]
    outputs: tuple[str, ...]
    tasks: tuple[str, ...]


# =============================================================================
# RUN EVENTS
# =============================================================================


class RunEventType(str, Enum):
    """Types of run journal events."""

    RUN_START = "RUN_START"
    RUN_END = "RUN_END"
    TASK_START = "TASK_START"
    TASK_PASS = "TASK_PASS"
    TASK_FAIL = "TASK_FAIL"
    TASK_REPLAY = "TASK_REPLAY"
    BREAKPOINT = "BREAKPOINT"
    LOG = "LOG"


@dataclass(frozen=True)
class RunEvent:
    """Single entry in a run's event journal."""

    event_id: str
    event_type: RunEventType
    run_id: str
    effect_id: str | None = None
    summary: str = ""
    created_at: str = ""  # ISO 8601

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_type": self.event_type.value,
            "run_id": self.run_id,
            "effect_id": self.effect_id,
            "summary": self.summary,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RunEvent":
        return cls(
            event_id=data["event_id"],
            event_type=RunEventType(data["event_type"]),
            run_id=data["run_id"],
            effect_id=data.get("effect_id"),
            summary=data.get("summary", ""),
            created_at=data.get("created_at", ""),
        )
