"""
ProcessContext: the runtime handed to every process function.

Provides task execution with schema validation and journaling, breakpoints,
concurrent fan-out, logging and a clock. Task and breakpoint identities are
deterministic, so re-running a process against an existing journal replays
completed work instead of repeating it.
"""

import hashlib
import json
import logging
import time
from collections import Counter
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from threading import Lock
from typing import Any, TypeVar

from jsonschema import Draft202012Validator

from archflow.application.events import RunEventEmitter
from archflow.domain.exceptions import (
    BreakpointRejected,
    OutputSchemaViolation,
    TaskFailed,
)
from archflow.domain.interfaces import (
    BreakpointHandlerInterface,
    TaskExecutorInterface,
    TaskJournalInterface,
)
from archflow.domain.models import (
    BreakpointDecision,
    BreakpointRequest,
    TaskContext,
    TaskDefinition,
    TaskKind,
)
from archflow.domain.tasks import TaskTemplate

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)


def _digest(*parts: str) -> str:
    return hashlib.sha256("\x1f".join(parts).encode()).hexdigest()[:12]


T = TypeVar("T")


class ParallelRunner:
    """Fan-out/fan-in over independent calls."""

    def __init__(self, ctx: "ProcessContext", max_workers: int = 8) -> None:
        self._ctx = ctx
        self._max_workers = max_workers

    def all(self, thunks: Sequence[Callable[[], T]]) -> list[T]:
        """
        Run zero-argument callables concurrently.

        Every call completes before returning. Results keep input order;
        if any call raised, the first failure in input order is re-raised.
        """
        if not thunks:
            return []
        workers = max(1, min(self._max_workers, len(thunks)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(thunk) for thunk in thunks]
        errors = [f.exception() for f in futures]
        for error in errors:
            if error is not None:
                raise error
        return [f.result() for f in futures]

    def map(
        self, template: TaskTemplate, args_list: Sequence[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        """Run one task template over several argument sets."""
        return self.all(
            [lambda args=args: self._ctx.task(template, args) for args in args_list]
        )


class ProcessContext:
    """
    Execution context for a single process run.

    Args:
        run_id: Identifier of the run
        agent: Executor for agent tasks
        breakpoints: Handler deciding breakpoints
        journal: Storage for task I/O, decisions and events
        shell: Executor for shell tasks (optional)
        max_attempts: Attempts per agent task when output violates its schema
        max_workers: Thread pool size for parallel fan-out
        clock: Source of epoch seconds
        raise_on_reject: Raise BreakpointRejected when a breakpoint is declined
    """

    def __init__(
        self,
        run_id: str,
        agent: TaskExecutorInterface,
        breakpoints: BreakpointHandlerInterface,
        journal: TaskJournalInterface,
        shell: TaskExecutorInterface | None = None,
        max_attempts: int = 2,
        max_workers: int = 8,
        clock: Callable[[], float] = time.time,
        raise_on_reject: bool = True,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.run_id = run_id
        self._agent = agent
        self._shell = shell
        self._breakpoints = breakpoints
        self._journal = journal
        self._max_attempts = max_attempts
        self._clock = clock
        self._raise_on_reject = raise_on_reject
        self._events = RunEventEmitter(journal, run_id)
        self._occurrences: Counter[str] = Counter()
        self._lock = Lock()
        self.parallel = ParallelRunner(self, max_workers=max_workers)

    # -------------------------------------------------------------------------
    # Clock and logging
    # -------------------------------------------------------------------------

    def now(self) -> int:
        """Current time in epoch milliseconds."""
        return int(self._clock() * 1000)

    def log(self, level: str, message: str) -> None:
        logger.log(LOG_LEVELS.get(level.lower(), logging.INFO), message)
        self._events.log(level, message)

    # -------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------

    def _next_id(self, key: str) -> str:
        with self._lock:
            self._occurrences[key] += 1
            n = self._occurrences[key]
        return key if n == 1 else f"{key}-{n}"

    def effect_id_for(self, template: TaskTemplate, args: dict[str, Any]) -> str:
        """Deterministic effect id for the next invocation of template with args."""
        return self._next_id(
            f"{template.task_id}-{_digest(template.task_id, _canonical(args))}"
        )

    def task(self, template: TaskTemplate, args: dict[str, Any]) -> dict[str, Any]:
        """
        Run a task and return its result.

        Raises:
            TaskFailed: If the executor raised
            OutputSchemaViolation: If agent output never satisfied its schema
        """
        effect_id = self.effect_id_for(template, args)
        task_ctx = TaskContext(
            task_id=template.task_id, effect_id=effect_id, run_id=self.run_id
        )
        task = template.build(args, task_ctx)

        replayed = self._journal.load_result(effect_id)
        if replayed is not None:
            logger.debug("Replaying %s from journal", effect_id)
            self._events.task_replay(effect_id)
            return replayed

        self._journal.record_task(task, args)
        if task.kind == TaskKind.SHELL:
            result = self._run_shell(task, args)
        else:
            result = self._run_agent(task, args)
        self._journal.record_result(task, result)
        return result

    def _run_shell(self, task: TaskDefinition, args: dict[str, Any]) -> dict[str, Any]:
        self._events.task_start(task.effect_id, 1)
        try:
            if self._shell is None:
                raise RuntimeError("No shell executor configured")
            result = self._shell.execute(task, args)
        except Exception as e:
            self._events.task_fail(task.effect_id, str(e))
            raise TaskFailed(task, e) from e
        self._events.task_pass(task.effect_id)
        return result

    def _run_agent(self, task: TaskDefinition, args: dict[str, Any]) -> dict[str, Any]:
        assert task.agent is not None
        validator = Draft202012Validator(task.agent.output_schema)
        feedback: str | None = None
        errors: list[str] = []

        for attempt in range(1, self._max_attempts + 1):
            logger.info("Task %s (attempt %d): %s", task.task_id, attempt, task.title)
            self._events.task_start(task.effect_id, attempt)
            try:
                result = self._agent.execute(task, args, feedback=feedback)
            except Exception as e:
                self._events.task_fail(task.effect_id, str(e))
                raise TaskFailed(task, e) from e

            errors = [
                f"{'/'.join(str(p) for p in err.absolute_path) or '<root>'}: "
                f"{err.message}"
                for err in validator.iter_errors(result)
            ]
            if not errors:
                self._events.task_pass(task.effect_id)
                return result

            feedback = "\n".join(errors)
            logger.warning(
                "Task %s output rejected (attempt %d/%d): %s",
                task.task_id,
                attempt,
                self._max_attempts,
                errors[0],
            )
            self._events.task_fail(task.effect_id, feedback)

        raise OutputSchemaViolation(task, errors, self._max_attempts)

    # -------------------------------------------------------------------------
    # Breakpoints
    # -------------------------------------------------------------------------

    def breakpoint(
        self,
        question: str,
        title: str,
        context: dict[str, Any] | None = None,
        files: list[dict[str, Any]] | None = None,
        summary: dict[str, Any] | None = None,
    ) -> BreakpointDecision:
        """
        Pause for human approval.

        Raises:
            BreakpointRejected: If declined and the context raises on rejection
        """
        breakpoint_id = self._next_id(f"bp-{_digest(title, question)}")
        payload: dict[str, Any] = {"runId": self.run_id, **(context or {})}
        if files is not None:
            payload["files"] = files
        if summary is not None:
            payload["summary"] = summary
        request = BreakpointRequest(
            breakpoint_id=breakpoint_id,
            title=title,
            question=question,
            context=payload,
        )

        decision = self._journal.load_breakpoint(breakpoint_id)
        if decision is None:
            logger.info("Breakpoint: %s", title)
            decision = self._breakpoints.decide(request)
            self._journal.record_breakpoint(request, decision)
        else:
            logger.debug("Replaying breakpoint %s from journal", breakpoint_id)

        verdict = "APPROVED" if decision.approved else "REJECTED"
        self._events.breakpoint(breakpoint_id, verdict)
        if not decision.approved and self._raise_on_reject:
            raise BreakpointRejected(request, decision)
        return decision
