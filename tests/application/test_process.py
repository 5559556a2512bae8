"""Tests for process definitions and input models."""

from typing import Any

import pytest

from archflow.application.context import ProcessContext
from archflow.application.process import ProcessDefinition, ProcessInputs, process
from archflow.domain.exceptions import InvalidProcessInputs
from archflow.domain.tasks import TaskTemplate


class ReviewInputs(ProcessInputs):
    system_name: str
    review_scope: str = "standard"
    max_findings: int = 10


@pytest.fixture
def review_process(summary_template: TaskTemplate) -> ProcessDefinition:
    """A small process echoing its parsed inputs."""

    @process(
        "software-architecture/test-review",
        description="Review for tests",
        inputs_model=ReviewInputs,
        outputs=("success", "systemName"),
        tasks=(summary_template,),
    )
    def review(inputs: ReviewInputs, ctx: ProcessContext) -> dict[str, Any]:
        return {
            "success": True,
            "systemName": inputs.system_name,
            "payload": inputs.to_payload(),
        }

    return review


class TestProcessInputs:
    """Tests for the camelCase input model."""

    def test_accepts_camel_case_keys(self) -> None:
        """JSON keys are camelCase aliases of the attributes."""
        inputs = ReviewInputs.model_validate(
            {"systemName": "Billing", "reviewScope": "quick"}
        )

        assert inputs.system_name == "Billing"
        assert inputs.review_scope == "quick"

    def test_accepts_field_names(self) -> None:
        """Attribute names are accepted too."""
        inputs = ReviewInputs.model_validate({"system_name": "Billing"})

        assert inputs.system_name == "Billing"

    def test_payload_uses_aliases_and_keeps_extras(self) -> None:
        """to_payload() emits camelCase keys and passes unknown keys through."""
        inputs = ReviewInputs.model_validate(
            {"systemName": "Billing", "owner": "platform"}
        )

        payload = inputs.to_payload()

        assert payload == {
            "systemName": "Billing",
            "reviewScope": "standard",
            "maxFindings": 10,
            "owner": "platform",
        }


class TestProcessDefinition:
    """Tests for ProcessDefinition."""

    def test_decorator_builds_definition(
        self, review_process: ProcessDefinition
    ) -> None:
        """@process returns a ProcessDefinition carrying its metadata."""
        assert isinstance(review_process, ProcessDefinition)
        assert review_process.process_id == "software-architecture/test-review"
        assert review_process.outputs == ("success", "systemName")

    def test_parse_inputs_rejects_invalid(
        self, review_process: ProcessDefinition
    ) -> None:
        """Missing or mistyped inputs raise InvalidProcessInputs."""
        with pytest.raises(InvalidProcessInputs, match="test-review"):
            review_process.parse_inputs({"maxFindings": "many"})

    def test_call_parses_then_runs(
        self, review_process: ProcessDefinition, make_context: Any
    ) -> None:
        """Calling the definition validates raw inputs before running."""
        output = review_process({"systemName": "Billing"}, make_context())

        assert output["systemName"] == "Billing"
        assert output["payload"]["reviewScope"] == "standard"

    def test_metadata(self, review_process: ProcessDefinition) -> None:
        """metadata lists input aliases, outputs and task ids."""
        meta = review_process.metadata

        assert meta.inputs == ("systemName", "reviewScope", "maxFindings")
        assert meta.outputs == ("success", "systemName")
        assert meta.tasks == ("summarize",)
        assert meta.description == "Review for tests"
