"""
ProcessRunner: resolves a process, runs it against a journal and maps
the outcome to a ProcessRunResult.
"""

import logging
import time
import uuid
from collections.abc import Callable
from typing import Any

from archflow.application.context import ProcessContext
from archflow.application.events import RunEventEmitter
from archflow.application.process import ProcessDefinition
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
from archflow.domain.models import ProcessRunResult, RunStatus

logger = logging.getLogger(__name__)

JournalFactory = Callable[[str], TaskJournalInterface]
ProcessResolver = Callable[[str], ProcessDefinition]


def new_run_id() -> str:
    return f"run-{uuid.uuid4().hex[:12]}"


class ProcessRunner:
    """
    Runs registered processes.

    Each run gets its own journal from `journal_factory`. Running again
    with the same run id replays completed tasks and breakpoints from
    that journal.
    """

    def __init__(
        self,
        agent: TaskExecutorInterface,
        breakpoints: BreakpointHandlerInterface,
        shell: TaskExecutorInterface | None = None,
        journal_factory: JournalFactory | None = None,
        resolver: ProcessResolver | None = None,
        max_attempts: int = 2,
        max_workers: int = 8,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            agent: Executor for agent tasks
            breakpoints: Handler deciding breakpoints
            shell: Executor for shell tasks
            journal_factory: Builds the journal for a run id (default: in-memory)
            resolver: Looks up a process by id (default: ProcessRegistry.get)
            max_attempts: Attempts per agent task on schema violations
            max_workers: Thread pool size for parallel fan-out
            clock: Source of epoch seconds
        """
        self._agent = agent
        self._breakpoints = breakpoints
        self._shell = shell
        self._max_attempts = max_attempts
        self._max_workers = max_workers
        self._clock = clock

        if journal_factory is None:
            from archflow.infrastructure.persistence import InMemoryTaskJournal

            journals: dict[str, TaskJournalInterface] = {}

            def _memory_journal(run_id: str) -> TaskJournalInterface:
                return journals.setdefault(run_id, InMemoryTaskJournal())

            journal_factory = _memory_journal

        if resolver is None:
            from archflow.infrastructure.registry import ProcessRegistry

            resolver = ProcessRegistry.get

        self._journal_factory = journal_factory
        self._resolver = resolver

    def run(
        self, process_id: str, inputs: dict[str, Any], run_id: str | None = None
    ) -> ProcessRunResult:
        """
        Run a process to completion.

        Raises:
            ProcessNotFound: If the process id is unknown
            InvalidProcessInputs: If the inputs fail validation
        """
        definition = self._resolver(process_id)
        parsed = definition.parse_inputs(inputs)

        run_id = run_id or new_run_id()
        journal = self._journal_factory(run_id)
        ctx = ProcessContext(
            run_id=run_id,
            agent=self._agent,
            breakpoints=self._breakpoints,
            journal=journal,
            shell=self._shell,
            max_attempts=self._max_attempts,
            max_workers=self._max_workers,
            clock=self._clock,
        )
        events = RunEventEmitter(journal, run_id)

        logger.info("Starting %s (run %s)", process_id, run_id)
        events.run_start(process_id)
        start = ctx.now()

        output: dict[str, Any] = {}
        error: str | None = None
        # Unmapped exceptions propagate but still close the run
        status = RunStatus.FAILED
        try:
            output = definition.func(parsed, ctx)
            if output.get("success", True) is False:
                error = str(output.get("error") or "Process reported failure")
            else:
                status = RunStatus.COMPLETED
        except BreakpointRejected as e:
            status = RunStatus.REJECTED
            error = str(e)
        except (TaskFailed, OutputSchemaViolation) as e:
            error = str(e)
        finally:
            events.run_end(status.value)

        if error:
            logger.warning("Run %s ended %s: %s", run_id, status.value, error)
        else:
            logger.info("Run %s completed", run_id)

        return ProcessRunResult(
            run_id=run_id,
            process_id=process_id,
            status=status,
            output=output,
            error=error,
            duration_ms=ctx.now() - start,
        )

    def resume(
        self, process_id: str, inputs: dict[str, Any], run_id: str
    ) -> ProcessRunResult:
        """Re-run a process against an existing run's journal."""
        logger.info("Resuming %s (run %s)", process_id, run_id)
        return self.run(process_id, inputs, run_id=run_id)
