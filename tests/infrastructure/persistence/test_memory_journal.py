"""Tests for InMemoryTaskJournal."""

from archflow.domain.models import (
    BreakpointDecision,
    BreakpointRequest,
    RunEvent,
    RunEventType,
    TaskContext,
    TaskDefinition,
)
from archflow.domain.tasks import shell_task
from archflow.infrastructure.persistence.memory import InMemoryTaskJournal


def _task(effect_id: str = "echo-abc") -> TaskDefinition:
    return shell_task(
        TaskContext(task_id="echo", effect_id=effect_id, run_id="run-1"),
        title="Echo",
        command="echo hi",
    )


class TestInMemoryTaskJournal:
    """Tests for the in-memory journal."""

    def test_result_round_trip(self, memory_journal: InMemoryTaskJournal) -> None:
        """Recorded results load back by effect id."""
        task = _task()
        memory_journal.record_task(task, {"word": "hi"})
        memory_journal.record_result(task, {"stdout": "hi"})

        assert memory_journal.load_result("echo-abc") == {"stdout": "hi"}
        assert memory_journal.tasks["echo-abc"] == (task, {"word": "hi"})

    def test_unknown_result_is_none(self, memory_journal: InMemoryTaskJournal) -> None:
        """Effect ids never completed load as None."""
        memory_journal.record_task(_task(), {})

        assert memory_journal.load_result("echo-abc") is None

    def test_results_are_copies(self, memory_journal: InMemoryTaskJournal) -> None:
        """Mutating a loaded result does not alter the journal."""
        task = _task()
        memory_journal.record_result(task, {"items": [1]})

        loaded = memory_journal.load_result("echo-abc")
        assert loaded is not None
        loaded["items"].append(2)

        assert memory_journal.load_result("echo-abc") == {"items": [1]}

    def test_breakpoint_round_trip(self, memory_journal: InMemoryTaskJournal) -> None:
        """Decisions load back by breakpoint id."""
        request = BreakpointRequest("bp-1", "Review", "Approve?", {"runId": "run-1"})
        decision = BreakpointDecision(approved=False, feedback="no", responder="auto")

        memory_journal.record_breakpoint(request, decision)

        assert memory_journal.load_breakpoint("bp-1") == decision
        assert memory_journal.load_breakpoint("bp-2") is None

    def test_events_filtered_by_type(self, memory_journal: InMemoryTaskJournal) -> None:
        """events() returns all events or those of one type."""
        memory_journal.append_event(RunEvent("e1", RunEventType.RUN_START, "run-1"))
        memory_journal.append_event(
            RunEvent("e2", RunEventType.LOG, "run-1", summary="x")
        )

        assert len(memory_journal.events()) == 2
        assert [e.event_id for e in memory_journal.events(RunEventType.LOG)] == ["e2"]
