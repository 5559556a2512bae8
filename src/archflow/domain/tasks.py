"""
Task templates.

A task template pairs a task id with a builder function. The runtime
calls the builder with the invocation's arguments and a TaskContext to
obtain a concrete TaskDefinition:

    @define_task("gap-analysis")
    def gap_analysis_task(args, task_ctx):
        return agent_task(task_ctx, title="Gap analysis", ...)
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from archflow.domain.models import (
    AgentSpec,
    ShellSpec,
    TaskContext,
    TaskDefinition,
    TaskIO,
    TaskKind,
)
from archflow.domain.prompts import AgentPrompt

TaskBuilder = Callable[[dict[str, Any], TaskContext], TaskDefinition]

DEFAULT_AGENT = "general-purpose"


@dataclass(frozen=True)
class TaskTemplate:
    """Named builder for task definitions."""

    task_id: str
    builder: TaskBuilder

    def build(self, args: dict[str, Any], task_ctx: TaskContext) -> TaskDefinition:
        task = self.builder(args, task_ctx)
        if task.task_id != self.task_id:
            raise ValueError(
                f"Builder for '{self.task_id}' produced task id '{task.task_id}'"
            )
        if task.effect_id != task_ctx.effect_id:
            raise ValueError(
                f"Builder for '{self.task_id}' ignored effect id {task_ctx.effect_id}"
            )
        return task


def define_task(task_id: str) -> Callable[[TaskBuilder], TaskTemplate]:
    """Decorator turning a builder function into a TaskTemplate."""

    def decorator(builder: TaskBuilder) -> TaskTemplate:
        return TaskTemplate(task_id=task_id, builder=builder)

    return decorator


def agent_task(
    task_ctx: TaskContext,
    *,
    title: str,
    role: str,
    task: str,
    context: dict[str, Any],
    instructions: Sequence[str],
    output_format: str,
    output_schema: dict[str, Any],
    labels: Sequence[str] = (),
    agent_name: str = DEFAULT_AGENT,
) -> TaskDefinition:
    """Build an agent task definition with the standard I/O layout."""
    return TaskDefinition(
        task_id=task_ctx.task_id,
        kind=TaskKind.AGENT,
        title=title,
        effect_id=task_ctx.effect_id,
        io=TaskIO.for_effect(task_ctx.effect_id),
        agent=AgentSpec(
            name=agent_name,
            prompt=AgentPrompt(
                role=role,
                task=task,
                context=context,
                instructions=tuple(instructions),
                output_format=output_format,
            ),
            output_schema=output_schema,
        ),
        labels=tuple(labels),
    )


def shell_task(
    task_ctx: TaskContext,
    *,
    title: str,
    command: str,
    timeout: float = 300.0,
    labels: Sequence[str] = (),
) -> TaskDefinition:
    """Build a shell task definition with the standard I/O layout."""
    return TaskDefinition(
        task_id=task_ctx.task_id,
        kind=TaskKind.SHELL,
        title=title,
        effect_id=task_ctx.effect_id,
        io=TaskIO.for_effect(task_ctx.effect_id),
        shell=ShellSpec(command=command, timeout=timeout),
        labels=tuple(labels),
    )
