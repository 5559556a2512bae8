"""Tests for the performance optimization process."""

from collections.abc import Callable
from typing import Any

import pytest

from archflow.domain.exceptions import InvalidProcessInputs
from archflow.processes.performance_optimization import performance_optimization

RunProcess = Callable[..., Any]

INPUTS = {"systemName": "Search API", "targetImprovement": 25}


def _improvements(*values: float) -> dict[str, Any]:
    """Validation patches yielding the given improvement per iteration."""
    return {
        "validation": [
            {"improvementPercentage": value, "newMetrics": {"latency": {"p95": 500 - 10 * i}}}
            for i, value in enumerate(values, 1)
        ]
    }


def _loop_titles(count: int) -> list[str]:
    return [f"Iteration {i} - Optimization Design Review" for i in range(1, count + 1)]


class TestOptimizationLoop:
    """Tests for the iterate-until-target loop."""

    def test_converges_after_first_iteration(self, run_process: RunProcess) -> None:
        """One iteration reaching the target stops the loop."""
        run = run_process(performance_optimization, INPUTS, _improvements(30))

        assert run.output["converged"] is True
        assert run.output["iterations"] == 1
        assert run.output["cumulativeImprovement"] == 30
        assert len(run.agent.calls_for("optimization-design")) == 1

    def test_converges_on_cumulative_improvement(self, run_process: RunProcess) -> None:
        """Improvements accumulate across iterations."""
        run = run_process(performance_optimization, INPUTS, _improvements(10, 10, 10))

        assert run.output["converged"] is True
        assert run.output["iterations"] == 3
        assert run.output["cumulativeImprovement"] == 30

    def test_stops_at_max_iterations(self, run_process: RunProcess) -> None:
        """Without reaching the target the loop stops at maxIterations."""
        run = run_process(performance_optimization, INPUTS, _improvements(5, 5, 5))

        assert run.output["converged"] is False
        assert run.output["iterations"] == 3
        assert run.output["cumulativeImprovement"] == 15
        assert [o["improvement"] for o in run.output["optimizations"]] == [5, 5, 5]

    def test_custom_max_iterations(self, run_process: RunProcess) -> None:
        """maxIterations bounds the loop."""
        run = run_process(
            performance_optimization, {**INPUTS, "maxIterations": 2}, _improvements(5, 5, 5)
        )

        assert run.output["iterations"] == 2
        assert run.titles.count("Iteration 3 - Optimization Design Review") == 0

    def test_max_iterations_must_be_positive(self, run_process: RunProcess) -> None:
        """maxIterations below one is rejected."""
        with pytest.raises(InvalidProcessInputs):
            run_process(performance_optimization, {**INPUTS, "maxIterations": 0})

    def test_each_iteration_validates_against_new_metrics(
        self, run_process: RunProcess
    ) -> None:
        """Later iterations start from the previous iteration's metrics."""
        run = run_process(performance_optimization, INPUTS, _improvements(5, 5))

        designs = run.agent.calls_for("optimization-design")
        assert designs[0]["previousResults"] is None
        assert designs[1]["iteration"] == 2
        assert designs[1]["currentMetrics"] == {"latency": {"p95": 490}}
        assert designs[1]["previousResults"]["improvement"] == 5

    def test_final_metrics(self, run_process: RunProcess) -> None:
        """Final metrics are the last validated metrics."""
        run = run_process(performance_optimization, INPUTS, _improvements(5, 30))

        assert run.output["finalMetrics"] == {"latency": {"p95": 480}}


class TestPerformanceGates:
    """Tests for the breakpoints around the loop."""

    def test_gate_sequence(self, run_process: RunProcess) -> None:
        """Baseline, backlog, one review per iteration and the final review."""
        run = run_process(
            performance_optimization,
            INPUTS,
            {**_improvements(10, 20), "load-test": {"passed": True}},
        )

        assert run.titles == [
            "Baseline Metrics Review",
            "Optimization Backlog Review",
            *_loop_titles(2),
            "Final Performance Optimization Review",
        ]

    def test_no_bottlenecks(self, run_process: RunProcess) -> None:
        """An empty profile asks whether to proceed anyway."""
        run = run_process(
            performance_optimization,
            INPUTS,
            {**_improvements(30), "profiling": {"bottlenecks": []}},
        )

        assert run.titles[1] == "No Bottlenecks Found"
        assert run.output["bottlenecks"] == []

    def test_failed_load_test(self, run_process: RunProcess) -> None:
        """A failed load test raises the load test gate."""
        run = run_process(
            performance_optimization,
            INPUTS,
            {**_improvements(30), "load-test": {"passed": False, "failures": ["p95 > 800ms"]}},
        )

        assert "Load Test Performance Gate" in run.titles
        gate = run.breakpoints.requests[run.titles.index("Load Test Performance Gate")]
        assert gate.context["failures"] == ["p95 > 800ms"]
        assert run.output["validationResults"]["loadTestPassed"] is False

    def test_load_testing_disabled(self, run_process: RunProcess) -> None:
        """With load testing disabled no load test runs."""
        run = run_process(
            performance_optimization,
            {**INPUTS, "loadTestingEnabled": False},
            _improvements(30),
        )

        assert run.agent.calls_for("load-test") == []
        assert run.output["validationResults"]["loadTestPassed"] is None
        assert run.output["validationResults"]["loadTestMetrics"] is None

    def test_weighted_score(self, run_process: RunProcess) -> None:
        """The weighted score combines the assessment's component scores."""
        scores = {"latency": 90, "throughput": 80, "resourceEfficiency": 70, "stability": 100}

        run = run_process(
            performance_optimization,
            INPUTS,
            {**_improvements(30), "performance-assessment": {"componentScores": scores}},
        )

        assert run.output["weightedScore"] == 84
