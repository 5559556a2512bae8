"""Tests for the event storming process."""

from collections.abc import Callable
from typing import Any

import pytest

from archflow.domain.exceptions import InvalidProcessInputs
from archflow.processes.event_storming import event_storming

RunProcess = Callable[..., Any]

INPUTS = {"domain": "Order fulfilment", "scope": "Checkout to delivery"}

FIXED_GATES = [
    "Workshop Preparation Review",
    "Timeline Validation",
    "Bounded Context Review",
]


class TestEventStorming:
    """Tests for the workshop flow and quality gate."""

    def test_quality_gate_below_target(self, run_process: RunProcess) -> None:
        """A score below 85 adds the model validation gate."""
        run = run_process(event_storming, INPUTS, {"validate-domain-model": {"score": 70}})

        assert run.titles == [*FIXED_GATES, "Quality Gate - Model Validation"]

    @pytest.mark.parametrize("score", [85, 90])
    def test_no_quality_gate_at_target(self, run_process: RunProcess, score: int) -> None:
        """Scores at or above 85 skip the quality gate."""
        run = run_process(
            event_storming, INPUTS, {"validate-domain-model": {"score": score}}
        )

        assert run.titles == FIXED_GATES
        assert run.output["validation"]["score"] == score

    def test_timeline_events_flow_downstream(self, run_process: RunProcess) -> None:
        """Ordered timeline events, not raw discoveries, feed later phases."""
        ordered = [{"name": "OrderPlaced"}, {"name": "OrderShipped"}]

        run = run_process(event_storming, INPUTS, {"enforce-timeline": {"events": ordered}})

        assert run.output["artifacts"]["eventTimeline"] == ordered
        assert run.agent.calls_for("identify-commands")[0]["events"] == ordered
        assert run.agent.calls_for("identify-actors")[0]["events"] == ordered

    def test_output_shape(self, run_process: RunProcess) -> None:
        """Output carries the model, contexts, artifacts and metadata."""
        run = run_process(
            event_storming,
            INPUTS,
            {
                "create-domain-model": {"model": {"aggregates": ["Order"]}},
                "identify-bounded-contexts": {"contexts": [{"name": "Ordering"}]},
            },
        )
        output = run.output

        assert output["success"] is True
        assert output["domainModel"] == {"aggregates": ["Order"]}
        assert output["boundedContexts"] == [{"name": "Ordering"}]
        assert set(output["artifacts"]) == {
            "eventTimeline",
            "commands",
            "actors",
            "aggregates",
            "externalSystems",
            "policies",
            "contextMap",
            "documentation",
        }
        assert output["metadata"]["participantCount"] == 8
        assert output["metadata"]["workshopDuration"] == 240

    def test_each_task_runs_once(self, run_process: RunProcess) -> None:
        """All thirteen workshop tasks run exactly once."""
        run = run_process(event_storming, INPUTS)

        assert run.agent.call_count == 13
        assert len({task_id for task_id, _ in run.agent.calls}) == 13

    def test_domain_required(self, run_process: RunProcess) -> None:
        """The domain input is mandatory."""
        with pytest.raises(InvalidProcessInputs):
            run_process(event_storming, {"scope": "x"})
