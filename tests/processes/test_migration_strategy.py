"""Tests for the migration strategy process."""

from collections.abc import Callable
from typing import Any

import pytest

from archflow.domain.exceptions import BreakpointRejected
from archflow.infrastructure.breakpoints.auto import AutoApproveHandler
from archflow.processes.migration_strategy import migration_strategy

RunProcess = Callable[..., Any]

INPUTS = {
    "projectName": "LegacyBilling",
    "currentState": {"platform": "on-prem", "language": "cobol"},
    "targetState": {"platform": "aws"},
    "migrationGoals": ["Reduce run cost", "Faster releases"],
    "constraints": {"budget": "2M", "timeline": "18 months"},
}

DEFAULT_GATES = ["Target Architecture Review", "Migration Strategy Approval"]


class TestMigrationStrategy:
    """Tests for the conditional warnings and the final approval."""

    def test_default_gates(self, run_process: RunProcess) -> None:
        """A complete, feasible, mitigated plan raises only the fixed gates."""
        run = run_process(migration_strategy, INPUTS)

        assert run.titles == DEFAULT_GATES
        assert run.output["success"] is True
        assert run.agent.call_count == 13

    @pytest.mark.parametrize(("completeness", "warned"), [(69, True), (70, False)])
    def test_completeness_warning(
        self, run_process: RunProcess, completeness: int, warned: bool
    ) -> None:
        """Assessments under 70% completeness ask for deeper discovery."""
        run = run_process(
            migration_strategy,
            INPUTS,
            {"current-state-assessment": {"completenessScore": completeness}},
        )

        assert ("Current State Assessment Warning" in run.titles) is warned
        assert run.output["currentState"]["completenessScore"] == completeness

    def test_feasibility_warning(self, run_process: RunProcess) -> None:
        """Strategies outside the constraints warn with the violations."""
        feasibility = {"withinConstraints": False, "violations": ["Budget exceeded by 30%"]}

        run = run_process(
            migration_strategy,
            INPUTS,
            {"migration-strategy-selection": {"feasibilityAssessment": feasibility}},
        )

        assert run.titles == [
            "Target Architecture Review",
            "Migration Feasibility Warning",
            "Migration Strategy Approval",
        ]
        warning = run.breakpoints.requests[1]
        assert warning.context["constraintViolations"] == ["Budget exceeded by 30%"]
        assert "2M" in warning.question

    def test_critical_risk_warning(self, run_process: RunProcess) -> None:
        """Critical risks without mitigation raise a warning."""
        risk = {"riskId": "R7", "severity": "critical", "mitigationPlan": ""}

        run = run_process(
            migration_strategy, INPUTS, {"migration-risk-assessment": {"risks": [risk]}}
        )

        assert "Critical Risk Warning" in run.titles
        assert run.breakpoints.requests[1].context["criticalRisks"] == [risk]

    @pytest.mark.parametrize(("score", "met"), [(85, True), (84, False)])
    def test_strategy_score(self, run_process: RunProcess, score: int, met: bool) -> None:
        """The strategy meets quality at 85 and above."""
        run = run_process(
            migration_strategy, INPUTS, {"strategy-validation": {"overallScore": score}}
        )

        assert run.output["strategyScore"] == score
        assert run.output["qualityMet"] is met
        assert run.breakpoints.requests[-1].context["summary"]["qualityMet"] is met

    def test_target_review_rejection(self, run_process: RunProcess) -> None:
        """Rejecting the target architecture stops before gap analysis."""
        handler = AutoApproveHandler(reject_titles=("Target Architecture Review",))

        with pytest.raises(BreakpointRejected, match="Target Architecture Review"):
            run_process(migration_strategy, INPUTS, breakpoints=handler)
