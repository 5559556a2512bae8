"""Schema fragments and result helpers shared by the process modules."""

from collections.abc import Sequence
from typing import Any

from archflow.domain.models import TaskContext, TaskDefinition
from archflow.domain.tasks import TaskTemplate, agent_task, define_task

ARTIFACTS: dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["path"],
        "properties": {
            "path": {"type": "string"},
            "format": {"type": "string"},
            "language": {"type": "string"},
            "label": {"type": "string"},
        },
    },
}

STRING = {"type": "string"}
NUMBER = {"type": "number"}
INTEGER = {"type": "integer"}
BOOLEAN = {"type": "boolean"}
OBJECT = {"type": "object"}
SCORE = {"type": "number", "minimum": 0, "maximum": 100}
STRINGS = {"type": "array", "items": {"type": "string"}}
OBJECTS = {"type": "array", "items": {"type": "object"}}
SEVERITY = {"type": "string", "enum": ["low", "medium", "high", "critical"]}


def array_of(**properties: Any) -> dict[str, Any]:
    return {"type": "array", "items": {"type": "object", "properties": properties}}


def schema(required: list[str], **properties: Any) -> dict[str, Any]:
    """Object schema with the given required keys and property schemas."""
    return {
        "type": "object",
        "required": required,
        "properties": properties,
    }


def run_metadata(process_id: str, start_time: int, **extra: Any) -> dict[str, Any]:
    return {"processId": process_id, "timestamp": start_time, **extra}


def failure(
    process_id: str,
    start_time: int,
    error: str,
    details: Any = None,
    **extra: Any,
) -> dict[str, Any]:
    """Result for a process that stopped early on a failed phase."""
    return {
        "success": False,
        "error": error,
        "details": details,
        **extra,
        "metadata": run_metadata(process_id, start_time),
    }


def phase_task(
    task_id: str,
    *,
    title: str,
    agent_name: str,
    role: str,
    task: str,
    instructions: Sequence[str],
    output_format: str,
    output_schema: dict[str, Any],
    labels: Sequence[str] = (),
) -> TaskTemplate:
    """
    Agent task whose prompt context is exactly its arguments.

    `title` is a str.format template filled from the task arguments, so
    "Phase 2: Service Boundaries - {projectName}" names the project.
    """

    @define_task(task_id)
    def build(args: dict[str, Any], task_ctx: TaskContext) -> TaskDefinition:
        return agent_task(
            task_ctx,
            title=title.format(**args),
            agent_name=agent_name,
            role=role,
            task=task,
            context=args,
            instructions=instructions,
            output_format=output_format,
            output_schema=output_schema,
            labels=labels,
        )

    return build
