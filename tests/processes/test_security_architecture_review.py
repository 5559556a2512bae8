"""Tests for the security architecture review process."""

from collections.abc import Callable
from typing import Any

import pytest

from archflow.domain.exceptions import (
    BreakpointRejected,
    InvalidProcessInputs,
    OutputSchemaViolation,
)
from archflow.infrastructure.breakpoints.auto import AutoApproveHandler
from archflow.processes.security_architecture_review import security_architecture_review

RunProcess = Callable[..., Any]

INPUTS = {
    "system": "Payments Gateway",
    "architecture": {"style": "microservices", "services": ["api", "ledger"]},
    "complianceStandards": ["PCI-DSS"],
}

PHASES = [
    "threat-modeling",
    "attack-surface-analysis",
    "security-patterns-review",
    "auth-assessment",
    "data-protection-review",
    "compliance-check",
    "security-testing",
    "risk-remediation-planning",
]


class TestSecurityArchitectureReview:
    """Tests for the review phases and gates."""

    def test_breakpoints(self, run_process: RunProcess) -> None:
        """Threat model, findings and final approval gates."""
        run = run_process(security_architecture_review, INPUTS)

        assert run.titles == [
            "Threat Model Review",
            "Security Findings Review",
            "Final Security Review Approval",
        ]

    def test_phases_recorded_in_order(self, run_process: RunProcess) -> None:
        """Every phase but the report is recorded as completed, in order."""
        run = run_process(security_architecture_review, INPUTS)

        phases = run.output["phases"]
        assert [p["phase"] for p in phases] == PHASES
        assert all(p["completed"] for p in phases)
        assert run.output["metadata"]["phaseCount"] == 8

    def test_final_report_receives_all_phases(self, run_process: RunProcess) -> None:
        """The report task sees the recorded phases and the risk register."""
        run = run_process(security_architecture_review, INPUTS)

        [args] = run.agent.calls_for("create-final-report")
        assert len(args["reviewResults"]["phases"]) == 8
        assert "riskRegister" in args["riskRegisterAndPlan"]

    def test_output_fields(self, run_process: RunProcess) -> None:
        """Risks, remediation and compliance status come from their phases."""
        run = run_process(
            security_architecture_review,
            INPUTS,
            {"check-compliance": {"status": "Non-Compliant"}},
        )

        output = run.output
        assert output["processSlug"] == "security-architecture-review"
        assert output["complianceStatus"] == "Non-Compliant"
        assert len(output["securityRisks"]) == 2
        assert len(output["remediationPlan"]) == 2

    def test_compliance_standards_forwarded(self, run_process: RunProcess) -> None:
        """Compliance checks cover the requested standards."""
        run = run_process(security_architecture_review, INPUTS)

        [args] = run.agent.calls_for("check-compliance")
        assert args["complianceStandards"] == ["PCI-DSS"]

    def test_invalid_compliance_status_violates_schema(
        self, run_process: RunProcess
    ) -> None:
        """Statuses outside the allowed set are rejected after retries."""
        with pytest.raises(OutputSchemaViolation, match="check-compliance"):
            run_process(
                security_architecture_review,
                INPUTS,
                {"check-compliance": {"status": "Fine"}},
            )

    def test_findings_rejection_skips_testing(self, run_process: RunProcess) -> None:
        """Rejecting the findings review stops before security testing."""
        handler = AutoApproveHandler(reject_titles=("Security Findings Review",))

        with pytest.raises(BreakpointRejected):
            run_process(security_architecture_review, INPUTS, breakpoints=handler)

        assert handler.titles == ["Threat Model Review", "Security Findings Review"]

    @pytest.mark.parametrize("missing", ["system", "architecture"])
    def test_system_and_architecture_required(
        self, run_process: RunProcess, missing: str
    ) -> None:
        """The system name and its architecture description have no defaults."""
        inputs = {key: value for key, value in INPUTS.items() if key != missing}

        with pytest.raises(InvalidProcessInputs, match=missing):
            run_process(security_architecture_review, inputs)
