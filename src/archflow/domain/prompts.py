"""
Prompt structures for agent tasks.

An AgentPrompt carries the role/task/context/instructions/output-format
quintet that every task sends to its agent. Prompt content is defined by
the process modules, not here.
"""

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AgentPrompt:
    """Structured prompt for an agent task."""

    role: str
    task: str
    context: dict[str, Any]
    instructions: tuple[str, ...] = ()
    output_format: str = ""
    feedback_wrapper: str = (
        "SCHEMA REJECTION:\n{feedback}\n"
        "Instruction: Return JSON that satisfies the output schema."
    )

    def render(self, feedback: str | None = None) -> str:
        """Render the prompt, optionally appending feedback from a rejected attempt."""
        parts = [
            f"# ROLE\n{self.role}",
            f"# TASK\n{self.task}",
        ]

        if self.context:
            parts.append(
                "# CONTEXT\n" + json.dumps(self.context, indent=2, default=str)
            )

        if self.instructions:
            numbered = "\n".join(
                f"{i}. {line}" for i, line in enumerate(self.instructions, 1)
            )
            parts.append(f"# INSTRUCTIONS\n{numbered}")

        if self.output_format:
            parts.append(f"# OUTPUT FORMAT\n{self.output_format}")

        if feedback:
            parts.append(
                "# FEEDBACK\n" + self.feedback_wrapper.format(feedback=feedback)
            )

        return "\n\n".join(parts)
