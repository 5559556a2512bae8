"""Shared pytest fixtures for archflow tests."""

import copy
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Any

import pytest

from archflow.application.context import ProcessContext
from archflow.application.process import ProcessDefinition
from archflow.domain.models import TaskContext, TaskDefinition
from archflow.domain.tasks import TaskTemplate, agent_task, define_task, shell_task
from archflow.infrastructure.agents.mock import MockAgentExecutor
from archflow.infrastructure.breakpoints.auto import AutoApproveHandler
from archflow.infrastructure.persistence.memory import InMemoryTaskJournal

FIXED_EPOCH = 1_700_000_000.0


# =============================================================================
# Schema stubs
# =============================================================================


def schema_stub(schema: dict[str, Any]) -> Any:
    """
    Build a populated value that satisfies a task output schema.

    Objects get every declared property, arrays get two items, enums
    take their first member and numbers sit inside SCORE bounds.
    """
    if "enum" in schema:
        return schema["enum"][0]
    kind = schema.get("type")
    if kind == "object":
        return {
            key: schema_stub(sub) for key, sub in schema.get("properties", {}).items()
        }
    if kind == "array":
        item = schema.get("items", {"type": "string"})
        return [schema_stub(item), schema_stub(item)]
    if kind == "number":
        return 80.0
    if kind == "integer":
        return 2
    if kind == "boolean":
        return True
    return "stub"


Patch = dict[str, Any] | list[dict[str, Any]] | Callable[
    [dict[str, Any]], dict[str, Any]
]


class StubResponder:
    """
    Mock responder answering every agent task with a schema stub.

    Overrides are keyed by task id and merged over the stub: a dict is
    applied on every call, a list is applied in sequence (its last entry
    repeats) and a callable receives the task args and returns the patch.
    """

    def __init__(self, overrides: dict[str, Patch] | None = None):
        self._overrides = overrides or {}
        self._positions: Counter[str] = Counter()
        self._lock = Lock()

    def __call__(self, task: TaskDefinition, args: dict[str, Any]) -> dict[str, Any]:
        assert task.agent is not None
        result = schema_stub(task.agent.output_schema)
        patch = self._overrides.get(task.task_id)
        if isinstance(patch, list):
            with self._lock:
                position = self._positions[task.task_id]
                self._positions[task.task_id] += 1
            patch = patch[min(position, len(patch) - 1)]
        elif callable(patch):
            patch = patch(args)
        if patch:
            result.update(copy.deepcopy(patch))
        return result


@dataclass
class ProcessRun:
    """Outcome of running a process function against mocks."""

    output: dict[str, Any]
    agent: MockAgentExecutor
    breakpoints: AutoApproveHandler
    journal: InMemoryTaskJournal

    @property
    def titles(self) -> list[str]:
        return self.breakpoints.titles


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fixed_clock() -> Callable[[], float]:
    """Clock frozen at a fixed epoch."""
    return lambda: FIXED_EPOCH


@pytest.fixture
def memory_journal() -> InMemoryTaskJournal:
    """Create an in-memory task journal."""
    return InMemoryTaskJournal()


@pytest.fixture
def auto_approve() -> AutoApproveHandler:
    """Breakpoint handler approving everything."""
    return AutoApproveHandler()


@pytest.fixture
def summary_template() -> TaskTemplate:
    """Agent task template returning a summary object."""

    @define_task("summarize")
    def summarize(args: dict[str, Any], task_ctx: TaskContext) -> TaskDefinition:
        return agent_task(
            task_ctx,
            title=f"Summarize {args['topic']}",
            role="Technical writer",
            task="Summarize the topic",
            context=args,
            instructions=["Be brief"],
            output_format="JSON with summary, wordCount",
            output_schema={
                "type": "object",
                "required": ["summary", "wordCount"],
                "properties": {
                    "summary": {"type": "string"},
                    "wordCount": {"type": "integer"},
                },
            },
            labels=["agent", "test"],
        )

    return summarize


@pytest.fixture
def echo_template() -> TaskTemplate:
    """Shell task template echoing a word."""

    @define_task("echo")
    def echo(args: dict[str, Any], task_ctx: TaskContext) -> TaskDefinition:
        return shell_task(
            task_ctx, title="Echo", command=f"echo {args['word']}", timeout=5
        )

    return echo


@pytest.fixture
def make_context(
    memory_journal: InMemoryTaskJournal,
    auto_approve: AutoApproveHandler,
    fixed_clock: Callable[[], float],
) -> Callable[..., ProcessContext]:
    """Factory for a ProcessContext over the shared journal and handler."""

    def _make(
        agent: MockAgentExecutor | None = None,
        shell: MockAgentExecutor | None = None,
        breakpoints: AutoApproveHandler | None = None,
        max_attempts: int = 2,
        raise_on_reject: bool = True,
    ) -> ProcessContext:
        return ProcessContext(
            run_id="run-test",
            agent=agent or MockAgentExecutor({}),
            breakpoints=breakpoints or auto_approve,
            journal=memory_journal,
            shell=shell,
            max_attempts=max_attempts,
            clock=fixed_clock,
            raise_on_reject=raise_on_reject,
        )

    return _make


@pytest.fixture
def stub_agent() -> Callable[..., MockAgentExecutor]:
    """Factory for a mock agent answering every task of a process with stubs."""

    def _make(
        definition: ProcessDefinition, overrides: dict[str, Patch] | None = None
    ) -> MockAgentExecutor:
        responder = StubResponder(overrides)
        return MockAgentExecutor({t.task_id: responder for t in definition.tasks})

    return _make


@pytest.fixture
def run_process(
    fixed_clock: Callable[[], float],
    stub_agent: Callable[..., MockAgentExecutor],
) -> Callable[..., ProcessRun]:
    """Run a process function with stubbed agents and auto-approval."""

    def _run(
        definition: ProcessDefinition,
        inputs: dict[str, Any],
        overrides: dict[str, Patch] | None = None,
        breakpoints: AutoApproveHandler | None = None,
        shell: MockAgentExecutor | None = None,
    ) -> ProcessRun:
        agent = stub_agent(definition, overrides)
        handler = breakpoints or AutoApproveHandler()
        journal = InMemoryTaskJournal()
        ctx = ProcessContext(
            run_id="run-process-test",
            agent=agent,
            breakpoints=handler,
            journal=journal,
            shell=shell,
            clock=fixed_clock,
        )
        output = definition(inputs, ctx)
        return ProcessRun(
            output=output, agent=agent, breakpoints=handler, journal=journal
        )

    return _run
