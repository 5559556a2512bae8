"""Run event emission service."""

import uuid
from datetime import UTC, datetime

from archflow.domain.interfaces import TaskJournalInterface
from archflow.domain.models import RunEvent, RunEventType


class RunEventEmitter:
    """
    Emits run events to a task journal.

    Provides convenience methods for the events a run produces,
    handling ID generation and timestamps.
    """

    def __init__(self, journal: TaskJournalInterface, run_id: str) -> None:
        self._journal = journal
        self._run_id = run_id

    def _emit(
        self, event_type: RunEventType, effect_id: str | None = None, summary: str = ""
    ) -> None:
        self._journal.append_event(
            RunEvent(
                event_id=str(uuid.uuid4()),
                event_type=event_type,
                run_id=self._run_id,
                effect_id=effect_id,
                summary=summary[:500],
                created_at=datetime.now(UTC).isoformat(),
            )
        )

    def run_start(self, process_id: str) -> None:
        self._emit(RunEventType.RUN_START, summary=process_id)

    def run_end(self, status: str) -> None:
        self._emit(RunEventType.RUN_END, summary=status)

    def task_start(self, effect_id: str, attempt: int) -> None:
        self._emit(RunEventType.TASK_START, effect_id, f"attempt {attempt}")

    def task_pass(self, effect_id: str) -> None:
        self._emit(RunEventType.TASK_PASS, effect_id)

    def task_fail(self, effect_id: str, feedback: str) -> None:
        self._emit(RunEventType.TASK_FAIL, effect_id, feedback)

    def task_replay(self, effect_id: str) -> None:
        self._emit(RunEventType.TASK_REPLAY, effect_id)

    def breakpoint(self, breakpoint_id: str, verdict: str) -> None:
        self._emit(RunEventType.BREAKPOINT, breakpoint_id, verdict)

    def log(self, level: str, message: str) -> None:
        self._emit(RunEventType.LOG, summary=f"[{level}] {message}")
