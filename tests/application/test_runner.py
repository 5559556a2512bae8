"""Tests for ProcessRunner - status mapping, run journals and resume."""

from typing import Any

import pytest

from archflow.application.context import ProcessContext
from archflow.application.process import ProcessDefinition, ProcessInputs, process
from archflow.application.runner import ProcessRunner, new_run_id
from archflow.domain.exceptions import InvalidProcessInputs, ProcessNotFound
from archflow.domain.models import RunEventType, RunStatus
from archflow.domain.tasks import TaskTemplate
from archflow.infrastructure.agents.mock import MockAgentExecutor
from archflow.infrastructure.breakpoints.auto import AutoApproveHandler
from archflow.infrastructure.persistence.memory import InMemoryTaskJournal

SUMMARY = {"summary": "ok", "wordCount": 1}


class TopicInputs(ProcessInputs):
    topic: str
    fail: bool = False


@pytest.fixture
def topic_process(summary_template: TaskTemplate) -> ProcessDefinition:
    """Two tasks around a breakpoint; optionally reports failure."""

    @process(
        "software-architecture/topic",
        description="Summarize a topic twice",
        inputs_model=TopicInputs,
        tasks=(summary_template,),
    )
    def topic(inputs: TopicInputs, ctx: ProcessContext) -> dict[str, Any]:
        first = ctx.task(summary_template, {"topic": inputs.topic})
        ctx.breakpoint("Continue?", "Summary Review")
        second = ctx.task(summary_template, {"topic": inputs.topic, "pass": 2})
        if inputs.fail:
            return {"success": False, "error": "Topic too broad"}
        return {"success": True, "summaries": [first["summary"], second["summary"]]}

    return topic


@pytest.fixture
def journals() -> dict[str, InMemoryTaskJournal]:
    """Journals created by the runner, keyed by run id."""
    return {}


@pytest.fixture
def make_runner(
    topic_process: ProcessDefinition, journals: dict[str, InMemoryTaskJournal]
) -> Any:
    """Factory for a runner resolving only the topic process."""

    def resolve(process_id: str) -> ProcessDefinition:
        if process_id != topic_process.process_id:
            raise ProcessNotFound(f"Process '{process_id}' not found")
        return topic_process

    def _make(
        agent: MockAgentExecutor | None = None,
        breakpoints: AutoApproveHandler | None = None,
    ) -> ProcessRunner:
        return ProcessRunner(
            agent=agent or MockAgentExecutor({"summarize": SUMMARY}),
            breakpoints=breakpoints or AutoApproveHandler(),
            journal_factory=lambda run_id: journals.setdefault(
                run_id, InMemoryTaskJournal()
            ),
            resolver=resolve,
            clock=lambda: 1_700_000_000.0,
        )

    return _make


class TestNewRunId:
    """Tests for new_run_id()."""

    def test_format(self) -> None:
        """Run ids are 'run-' plus 12 hex characters."""
        run_id = new_run_id()

        assert run_id.startswith("run-")
        assert len(run_id) == 16
        int(run_id[4:], 16)

    def test_unique(self) -> None:
        """Consecutive ids differ."""
        assert new_run_id() != new_run_id()


class TestProcessRunner:
    """Tests for ProcessRunner.run()."""

    def test_completed_run(
        self, make_runner: Any, journals: dict[str, InMemoryTaskJournal]
    ) -> None:
        """A process finishing normally is COMPLETED."""
        result = make_runner().run(
            "software-architecture/topic", {"topic": "CQRS"}, run_id="run-1"
        )

        assert result.status == RunStatus.COMPLETED
        assert result.success
        assert result.error is None
        assert result.output["summaries"] == ["ok", "ok"]
        assert result.run_id == "run-1"
        assert result.duration_ms == 0

        events = journals["run-1"].events()
        assert events[0].event_type == RunEventType.RUN_START
        assert events[0].summary == "software-architecture/topic"
        assert events[-1].event_type == RunEventType.RUN_END
        assert events[-1].summary == "completed"

    def test_reported_failure(self, make_runner: Any) -> None:
        """success: False in the output makes the run FAILED with its error."""
        result = make_runner().run(
            "software-architecture/topic", {"topic": "CQRS", "fail": True}
        )

        assert result.status == RunStatus.FAILED
        assert result.error == "Topic too broad"
        assert result.output["success"] is False

    def test_rejected_breakpoint(self, make_runner: Any) -> None:
        """A declined breakpoint makes the run REJECTED."""
        runner = make_runner(
            breakpoints=AutoApproveHandler(approve=False, feedback="No")
        )

        result = runner.run("software-architecture/topic", {"topic": "CQRS"})

        assert result.status == RunStatus.REJECTED
        assert result.error == "Breakpoint 'Summary Review' rejected: No"
        assert result.output == {}

    def test_task_failure(self, make_runner: Any) -> None:
        """A failing task makes the run FAILED."""
        result = make_runner(agent=MockAgentExecutor({})).run(
            "software-architecture/topic", {"topic": "CQRS"}
        )

        assert result.status == RunStatus.FAILED
        assert "summarize" in (result.error or "")

    def test_schema_violation(self, make_runner: Any) -> None:
        """Output that never validates makes the run FAILED."""
        agent = MockAgentExecutor({"summarize": {"summary": "no count"}})

        result = make_runner(agent=agent).run(
            "software-architecture/topic", {"topic": "CQRS"}
        )

        assert result.status == RunStatus.FAILED
        assert "violated its schema" in (result.error or "")

    def test_unexpected_error_still_ends_run(
        self, make_runner: Any, journals: dict[str, InMemoryTaskJournal]
    ) -> None:
        """Unmapped errors propagate after a failed RUN_END is recorded."""

        def hang_up(request: Any) -> bool:
            raise RuntimeError("console closed")

        runner = make_runner(breakpoints=AutoApproveHandler(policy=hang_up))

        with pytest.raises(RuntimeError, match="console closed"):
            runner.run("software-architecture/topic", {"topic": "CQRS"}, run_id="run-x")

        events = journals["run-x"].events()
        assert events[-1].event_type == RunEventType.RUN_END
        assert events[-1].summary == "failed"

    def test_unknown_process_propagates(self, make_runner: Any) -> None:
        """Unknown process ids raise ProcessNotFound."""
        with pytest.raises(ProcessNotFound):
            make_runner().run("software-architecture/unknown", {})

    def test_invalid_inputs_propagate(self, make_runner: Any) -> None:
        """Invalid inputs raise before anything runs."""
        agent = MockAgentExecutor({"summarize": SUMMARY})

        with pytest.raises(InvalidProcessInputs):
            make_runner(agent=agent).run("software-architecture/topic", {})

        assert agent.call_count == 0

    def test_default_journal_is_in_memory(
        self, topic_process: ProcessDefinition
    ) -> None:
        """Without a factory the runner keeps in-memory journals per run id."""
        agent = MockAgentExecutor({"summarize": SUMMARY})
        runner = ProcessRunner(
            agent=agent,
            breakpoints=AutoApproveHandler(),
            resolver=lambda process_id: topic_process,
        )

        runner.run("software-architecture/topic", {"topic": "CQRS"}, run_id="run-mem")
        runner.run("software-architecture/topic", {"topic": "CQRS"}, run_id="run-mem")

        assert agent.call_count == 2


class TestResume:
    """Tests for resuming a run from its journal."""

    def test_resume_replays_completed_work(self, make_runner: Any) -> None:
        """Resuming a rejected run replays the task and the journaled rejection."""
        agent = MockAgentExecutor({"summarize": SUMMARY})
        rejected = make_runner(
            agent=agent, breakpoints=AutoApproveHandler(approve=False)
        )
        first = rejected.run(
            "software-architecture/topic", {"topic": "CQRS"}, run_id="run-2"
        )
        assert first.status == RunStatus.REJECTED
        assert agent.call_count == 1

        again = make_runner(agent=agent).resume(
            "software-architecture/topic", {"topic": "CQRS"}, run_id="run-2"
        )
        assert again.status == RunStatus.REJECTED
        assert agent.call_count == 1

    def test_resume_completed_run_makes_no_calls(self, make_runner: Any) -> None:
        """Resuming a completed run replays every task."""
        agent = MockAgentExecutor({"summarize": SUMMARY})
        make_runner(agent=agent).run(
            "software-architecture/topic", {"topic": "CQRS"}, run_id="run-3"
        )
        agent.reset()

        result = make_runner(agent=agent).resume(
            "software-architecture/topic", {"topic": "CQRS"}, run_id="run-3"
        )

        assert result.status == RunStatus.COMPLETED
        assert result.output["summaries"] == ["ok", "ok"]
        assert agent.call_count == 0
