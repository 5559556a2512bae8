"""Tests for the Infrastructure as Code review process."""

from collections.abc import Callable
from typing import Any

import pytest

from archflow.domain.exceptions import TaskFailed
from archflow.infrastructure.agents.mock import MockAgentExecutor
from archflow.processes.iac_review import iac_review, syntax_validation_command

RunProcess = Callable[..., Any]

INPUTS: dict[str, Any] = {"projectName": "payments-infra", "iacPath": "./infra"}

# Findings-free results: no quality gate fires
CLEAN: dict[str, Any] = {
    "structure-review": {"success": True, "score": 90, "findings": []},
    "security-scan": {"success": True, "score": 90, "findings": []},
    "compliance-check": {"success": True, "score": 80, "findings": []},
    "secrets-detection": {"success": True, "exposedSecretsCount": 0, "findings": []},
    "resource-validation": {"success": True, "score": 85, "findings": []},
    "cost-estimation": {"success": True, "estimatedMonthlyCost": 4000, "score": 75},
    "cost-optimization": {"success": True, "totalPotentialSavings": 300},
    "state-management-review": {"success": True, "score": 95, "findings": []},
    "documentation-review": {"success": True, "score": 70},
    "plan-validation": {"success": True, "valid": True, "errors": []},
    "final-report-generation": {"success": True, "overallQualityScore": 88},
}

SYNTAX_OK = {"success": True, "valid": True, "errors": [], "artifacts": []}


def _shell(result: dict[str, Any] | None = None) -> MockAgentExecutor:
    return MockAgentExecutor({"syntax-validation": result or SYNTAX_OK})


def _with(**patches: dict[str, Any]) -> dict[str, Any]:
    """CLEAN with per-task patches; keyword names use underscores for dashes."""
    overrides = {key: dict(value) for key, value in CLEAN.items()}
    for name, patch in patches.items():
        overrides[name.replace("_", "-")].update(patch)
    return overrides


class TestSyntaxValidationCommand:
    """Tests for the per-tool validation command."""

    def test_terraform(self) -> None:
        """Terraform validates without a backend inside the IaC directory."""
        assert syntax_validation_command("terraform", "./infra") == (
            "cd ./infra && terraform init -backend=false && terraform validate"
        )

    def test_cloudformation(self) -> None:
        """CloudFormation validates the template file."""
        command = syntax_validation_command("cloudformation", "stacks")

        assert command == (
            "aws cloudformation validate-template --template-body file://stacks/template.yaml"
        )

    def test_unsupported_tool(self) -> None:
        """Other tools get an explanatory echo."""
        assert syntax_validation_command("pulumi", ".") == (
            "echo 'Syntax validation for pulumi not implemented'"
        )

    def test_path_is_quoted(self) -> None:
        """Paths with shell metacharacters are quoted."""
        command = syntax_validation_command("terraform", "infra; rm -rf /")

        assert command.startswith("cd 'infra; rm -rf /' && ")


class TestIacReview:
    """Tests for phase gates and the review summary."""

    def test_clean_review_has_no_gates(self, run_process: RunProcess) -> None:
        """A findings-free review raises no breakpoints."""
        run = run_process(iac_review, INPUTS, CLEAN, shell=_shell())

        assert run.titles == []
        assert run.output["success"] is True
        assert run.output["summary"]["budgetStatus"] == "within-budget"
        assert run.output["summary"]["qualityGate"] == "passed"

    def test_phase_scores(self, run_process: RunProcess) -> None:
        """Phase scores average security and compliance and score validity."""
        run = run_process(iac_review, INPUTS, CLEAN, shell=_shell())

        assert run.output["phaseScores"] == {
            "structure": 90,
            "security": 85,
            "resourceConfig": 85,
            "cost": 75,
            "stateManagement": 95,
            "documentation": 70,
            "testing": 100,
        }

    def test_syntax_runs_as_shell_task(self, run_process: RunProcess) -> None:
        """Syntax validation goes to the shell executor, not the agent."""
        shell = _shell()

        run = run_process(iac_review, INPUTS, CLEAN, shell=shell)

        assert shell.call_count == 1
        assert run.agent.calls_for("syntax-validation") == []

    def test_missing_shell_executor_fails(self, run_process: RunProcess) -> None:
        """Without a shell executor the syntax task fails the run."""
        with pytest.raises(TaskFailed, match="No shell executor configured"):
            run_process(iac_review, INPUTS, CLEAN)

    def test_failed_structure_review_stops(self, run_process: RunProcess) -> None:
        """A failed phase returns a failure result with its details."""
        run = run_process(
            iac_review, INPUTS, _with(structure_review={"success": False}), shell=_shell()
        )

        assert run.output["success"] is False
        assert run.output["error"] == "Failed to complete IaC structure review"
        assert run.output["details"]["success"] is False
        assert run.agent.calls_for("security-scan") == []

    def test_structure_gate(self, run_process: RunProcess) -> None:
        """High or critical structure findings raise the structure gate."""
        findings = [
            {"severity": "high", "category": "modules", "message": "m", "location": "main.tf"},
            {"severity": "low", "category": "naming", "message": "m", "location": "vars.tf"},
        ]

        run = run_process(
            iac_review, INPUTS, _with(structure_review={"findings": findings}), shell=_shell()
        )

        assert run.titles == ["IaC Structure Review Gate"]
        assert run.breakpoints.requests[0].context["criticalIssues"] == 1

    def test_exposed_secret_gate(self, run_process: RunProcess) -> None:
        """Exposed secrets raise the critical security gate."""
        secret = {
            "severity": "high",
            "type": "exposed-secret",
            "location": "db.tf:12",
            "secretType": "password",
            "recommendation": "Use a secrets manager",
        }

        run = run_process(
            iac_review,
            INPUTS,
            _with(secrets_detection={"findings": [secret], "exposedSecretsCount": 1}),
            shell=_shell(),
        )

        assert run.titles == ["Critical Security Issues Gate"]
        assert run.output["securityFindings"] == [secret]
        assert run.output["summary"]["highFindings"] == 1

    def test_availability_gate_requires_high_availability(
        self, run_process: RunProcess
    ) -> None:
        """Availability findings gate only when high availability is required."""
        finding = {
            "severity": "high",
            "category": "availability",
            "resource": "aws_db_instance.main",
            "issue": "Single AZ",
            "recommendation": "Enable multi-AZ",
        }
        overrides = _with(resource_validation={"findings": [finding]})

        required = run_process(iac_review, INPUTS, overrides, shell=_shell())
        relaxed = run_process(
            iac_review,
            {**INPUTS, "constraints": {"highAvailability": False}},
            overrides,
            shell=_shell(),
        )

        assert required.titles == ["Resource Configuration Gate"]
        assert relaxed.titles == []

    def test_cost_budget_gate(self, run_process: RunProcess) -> None:
        """Estimates over budget raise the cost gate with the overage."""
        run = run_process(
            iac_review,
            {**INPUTS, "constraints": {"budget": 5000}},
            _with(cost_estimation={"estimatedMonthlyCost": 6000}),
            shell=_shell(),
        )

        assert run.titles == ["Cost Budget Gate"]
        context = run.breakpoints.requests[0].context
        assert context["overage"] == 1000
        assert context["overagePercent"] == "20.0"
        assert run.output["summary"]["budgetStatus"] == "over-budget"

    def test_state_management_gate(self, run_process: RunProcess) -> None:
        """Severe state findings raise the state management gate."""
        finding = {
            "severity": "critical",
            "category": "locking",
            "issue": "No lock table",
            "recommendation": "Add DynamoDB locking",
        }

        run = run_process(
            iac_review,
            INPUTS,
            _with(state_management_review={"findings": [finding], "lockingEnabled": False}),
            shell=_shell(),
        )

        assert run.titles == ["State Management Gate"]
        assert run.breakpoints.requests[0].context["lockingEnabled"] is False

    def test_validation_errors_gate(self, run_process: RunProcess) -> None:
        """Syntax or plan errors raise the validation gate."""
        syntax = {**SYNTAX_OK, "valid": False, "errors": ["Unsupported argument"]}

        run = run_process(iac_review, INPUTS, CLEAN, shell=_shell(syntax))

        assert run.titles == ["Validation Errors Gate"]
        assert run.output["phaseScores"]["testing"] == 50

    def test_failed_syntax_validation_stops(self, run_process: RunProcess) -> None:
        """A failing syntax command stops the review."""
        syntax = {"success": False, "valid": False, "errors": ["Exit code 1"], "artifacts": []}

        run = run_process(iac_review, INPUTS, CLEAN, shell=_shell(syntax))

        assert run.output["success"] is False
        assert run.output["error"] == "Failed to complete IaC testing and validation"

    @pytest.mark.parametrize(
        ("scope", "score", "gated"),
        [
            ("comprehensive", 79, True),
            ("comprehensive", 80, False),
            ("standard", 75, False),
            ("quick", 59, True),
        ],
    )
    def test_final_quality_gate(
        self, run_process: RunProcess, scope: str, score: int, gated: bool
    ) -> None:
        """The final gate uses the review scope's threshold."""
        run = run_process(
            iac_review,
            {**INPUTS, "reviewScope": scope},
            _with(final_report_generation={"overallQualityScore": score}),
            shell=_shell(),
        )

        assert ("Final Quality Gate" in run.titles) is gated
        assert run.output["summary"]["qualityGate"] == ("failed" if gated else "passed")
