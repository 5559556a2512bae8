"""
Process definitions.

A process is a function `(inputs, ctx) -> dict` paired with a pydantic
model for its inputs and descriptive metadata:

    @process(
        "software-architecture/gap-review",
        description="Review gaps",
        inputs_model=GapReviewInputs,
        outputs=("gaps", "artifacts"),
        tasks=(gap_task,),
    )
    def gap_review(inputs: GapReviewInputs, ctx: ProcessContext) -> dict:
        ...
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from archflow.application.context import ProcessContext
from archflow.domain.exceptions import InvalidProcessInputs
from archflow.domain.models import ProcessMetadata
from archflow.domain.tasks import TaskTemplate


class ProcessInputs(BaseModel):
    """Base model for process inputs: snake_case attributes, camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    def to_payload(self) -> dict[str, Any]:
        """Inputs as the camelCase JSON sent to agents."""
        payload: dict[str, Any] = self.model_dump(by_alias=True, mode="json")
        return payload


@dataclass(frozen=True)
class ProcessDefinition:
    """A registered process function with its metadata."""

    process_id: str
    description: str
    func: Callable[[Any, ProcessContext], dict[str, Any]]
    inputs_model: type[ProcessInputs]
    outputs: tuple[str, ...] = ()
    tasks: tuple[TaskTemplate, ...] = ()

    def parse_inputs(self, inputs: dict[str, Any]) -> ProcessInputs:
        """
        Validate raw inputs against the process's input model.

        Raises:
            InvalidProcessInputs: If validation fails
        """
        try:
            return self.inputs_model.model_validate(inputs)
        except ValidationError as e:
            raise InvalidProcessInputs(
                f"Invalid inputs for '{self.process_id}': {e}"
            ) from e

    def __call__(self, inputs: dict[str, Any], ctx: ProcessContext) -> dict[str, Any]:
        return self.func(self.parse_inputs(inputs), ctx)

    @property
    def metadata(self) -> ProcessMetadata:
        return ProcessMetadata(
            process_id=self.process_id,
            description=self.description,
            inputs=tuple(
                field.alias or name
                for name, field in self.inputs_model.model_fields.items()
            ),
            outputs=self.outputs,
            tasks=tuple(t.task_id for t in self.tasks),
        )


def process(
    process_id: str,
    *,
    description: str,
    inputs_model: type[ProcessInputs],
    outputs: Sequence[str] = (),
    tasks: Sequence[TaskTemplate] = (),
) -> Callable[[Callable[..., dict[str, Any]]], ProcessDefinition]:
    """Decorator declaring a process function and its metadata."""

    def decorator(func: Callable[..., dict[str, Any]]) -> ProcessDefinition:
        return ProcessDefinition(
            process_id=process_id,
            description=description,
            func=func,
            inputs_model=inputs_model,
            outputs=tuple(outputs),
            tasks=tuple(tasks),
        )

    return decorator
