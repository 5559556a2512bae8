"""Tests for the C4 model documentation process."""

from collections.abc import Callable
from typing import Any

import pytest

from archflow.domain.exceptions import BreakpointRejected
from archflow.infrastructure.breakpoints.auto import AutoApproveHandler
from archflow.processes.c4_model_documentation import c4_model_documentation

RunProcess = Callable[..., Any]

INPUTS: dict[str, Any] = {
    "systemName": "Checkout",
    "requirements": [{"id": "R1", "description": "Place order"}],
    "technologies": ["python", "postgres"],
}

SIMPLE_COMPONENTS = {
    "component-breakdown": {
        "components": [
            {"name": "OrderService", "complexity": "low", "requiresCodeDiagram": False}
        ]
    }
}


class TestC4ModelDocumentation:
    """Tests for the diagram hierarchy and review gates."""

    def test_breakpoint_sequence(self, run_process: RunProcess) -> None:
        """The four review gates are raised in order."""
        run = run_process(c4_model_documentation, INPUTS)

        assert run.titles == [
            "C4 Context Diagram Review",
            "C4 Container Diagram Technology Review",
            "C4 Component Diagrams Development Review",
            "C4 Architecture Documentation Final Review",
        ]

    def test_one_component_diagram_per_container(
        self, run_process: RunProcess
    ) -> None:
        """Each identified container gets a breakdown and a diagram."""
        run = run_process(c4_model_documentation, INPUTS)

        assert len(run.agent.calls_for("component-breakdown")) == 2
        assert len(run.output["componentDiagrams"]) == 2

    def test_code_diagrams_disabled_by_default(
        self, run_process: RunProcess
    ) -> None:
        """Without includeCodeDiagrams no code diagrams are generated."""
        run = run_process(c4_model_documentation, INPUTS)

        assert run.output["codeDiagrams"] == []
        assert run.agent.calls_for("code-diagram-generation") == []

    def test_code_diagrams_for_complex_components(
        self, run_process: RunProcess
    ) -> None:
        """Only high-complexity or flagged components get code diagrams."""
        overrides = {
            "component-breakdown": {
                "components": [
                    {"name": "Pricing", "complexity": "high", "requiresCodeDiagram": False},
                    {"name": "Audit", "complexity": "low", "requiresCodeDiagram": False},
                ]
            }
        }

        run = run_process(
            c4_model_documentation, {**INPUTS, "includeCodeDiagrams": True}, overrides
        )

        calls = run.agent.calls_for("code-diagram-generation")
        assert len(calls) == 2
        assert {c["component"]["name"] for c in calls} == {"Pricing"}
        assert len(run.output["codeDiagrams"]) == 2

    def test_no_complex_components(self, run_process: RunProcess) -> None:
        """Code diagrams stay empty when no component qualifies."""
        run = run_process(
            c4_model_documentation,
            {**INPUTS, "includeCodeDiagrams": True},
            SIMPLE_COMPONENTS,
        )

        assert run.output["codeDiagrams"] == []

    def test_no_supplementary_diagrams(
        self, run_process: RunProcess
    ) -> None:
        """Without deployment, journeys or external systems nothing extra is drawn."""
        run = run_process(c4_model_documentation, INPUTS)

        assert run.output["supplementaryDiagrams"] == []

    def test_supplementary_diagrams(self, run_process: RunProcess) -> None:
        """Deployment, dynamic and landscape diagrams follow their inputs."""
        inputs = {
            **INPUTS,
            "requirements": [{"id": "R1", "userJourney": "checkout"}],
            "externalSystems": ["Stripe"],
            "deploymentArchitecture": {"platform": "kubernetes"},
        }

        run = run_process(c4_model_documentation, inputs)

        assert len(run.output["supplementaryDiagrams"]) == 3
        assert run.agent.calls_for("deployment-diagram-generation")
        assert run.agent.calls_for("dynamic-diagram-generation")
        assert run.agent.calls_for("system-landscape-diagram")

    def test_deployment_diagram_can_be_disabled(
        self, run_process: RunProcess
    ) -> None:
        """generateDeploymentDiagram=False skips the deployment diagram."""
        inputs = {
            **INPUTS,
            "deploymentArchitecture": {"platform": "kubernetes"},
            "generateDeploymentDiagram": False,
        }

        run = run_process(c4_model_documentation, inputs)

        assert run.agent.calls_for("deployment-diagram-generation") == []

    @pytest.mark.parametrize(("score", "met"), [(90, True), (85, True), (70, False)])
    def test_quality_target(
        self, run_process: RunProcess, score: int, met: bool
    ) -> None:
        """Quality is met at 85 and above."""
        run = run_process(
            c4_model_documentation,
            INPUTS,
            {"c4-quality-validation": {"overallScore": score}},
        )

        assert run.output["qualityScore"] == score
        assert run.output["qualityMet"] is met

    def test_weighted_score(self, run_process: RunProcess) -> None:
        """The weighted score combines the reported component scores."""
        scores = {
            "contextDiagram": 100,
            "containerDiagram": 100,
            "componentDiagrams": 60,
            "diagramNotation": 60,
            "narrativeDocumentation": 60,
            "supplementaryDiagrams": 60,
        }

        run = run_process(
            c4_model_documentation, INPUTS, {"c4-quality-validation": {"componentScores": scores}}
        )

        assert run.output["weightedScore"] == 76

    def test_artifacts_accumulate(self, run_process: RunProcess) -> None:
        """Every phase contributes its artifacts."""
        run = run_process(c4_model_documentation, INPUTS)

        # 4 single tasks, 2 breakdowns, 2 component diagrams, narrative, validation
        assert len(run.output["artifacts"]) == 2 * 10

    def test_rejected_context_review_stops(
        self, run_process: RunProcess
    ) -> None:
        """Rejecting the context review stops before containers."""
        handler = AutoApproveHandler(reject_titles=("C4 Context Diagram Review",))

        with pytest.raises(BreakpointRejected):
            run_process(c4_model_documentation, INPUTS, breakpoints=handler)

        assert handler.titles == ["C4 Context Diagram Review"]
