"""Tests for RunEventEmitter."""

from archflow.application.events import RunEventEmitter
from archflow.domain.models import RunEventType
from archflow.infrastructure.persistence.memory import InMemoryTaskJournal


class TestRunEventEmitter:
    """Tests for event emission."""

    def test_emits_typed_events(self, memory_journal: InMemoryTaskJournal) -> None:
        """Each convenience method emits its event type for the run."""
        emitter = RunEventEmitter(memory_journal, "run-1")

        emitter.run_start("software-architecture/event-storming")
        emitter.task_start("prepare-workshop-abc", 1)
        emitter.task_pass("prepare-workshop-abc")
        emitter.breakpoint("bp-abc", "APPROVED")
        emitter.run_end("completed")

        events = memory_journal.events()
        assert [e.event_type for e in events] == [
            RunEventType.RUN_START,
            RunEventType.TASK_START,
            RunEventType.TASK_PASS,
            RunEventType.BREAKPOINT,
            RunEventType.RUN_END,
        ]
        assert all(e.run_id == "run-1" for e in events)
        assert events[1].summary == "attempt 1"
        assert events[1].effect_id == "prepare-workshop-abc"
        assert len({e.event_id for e in events}) == 5
        assert all(e.created_at for e in events)

    def test_truncates_long_summaries(
        self, memory_journal: InMemoryTaskJournal
    ) -> None:
        """Summaries are capped at 500 characters."""
        RunEventEmitter(memory_journal, "run-1").task_fail("x-abc", "e" * 2000)

        [event] = memory_journal.events(RunEventType.TASK_FAIL)
        assert len(event.summary) == 500
