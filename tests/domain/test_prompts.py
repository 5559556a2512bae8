"""Tests for AgentPrompt rendering."""

from archflow.domain.prompts import AgentPrompt


class TestAgentPromptRender:
    """Tests for AgentPrompt.render()."""

    def test_renders_sections_in_order(self) -> None:
        """Role, task, context, instructions and output format appear in order."""
        prompt = AgentPrompt(
            role="Domain expert",
            task="Find events",
            context={"domain": "checkout"},
            instructions=("List events", "Order them"),
            output_format="JSON with events",
        )

        rendered = prompt.render()

        headings = ["# ROLE", "# TASK", "# CONTEXT", "# INSTRUCTIONS", "# OUTPUT FORMAT"]
        positions = [rendered.index(h) for h in headings]
        assert positions == sorted(positions)
        assert '"domain": "checkout"' in rendered

    def test_numbers_instructions(self) -> None:
        """Instructions are rendered as a numbered list."""
        prompt = AgentPrompt(
            role="r", task="t", context={}, instructions=("first", "second")
        )

        rendered = prompt.render()

        assert "1. first\n2. second" in rendered

    def test_omits_empty_sections(self) -> None:
        """Empty context, instructions and output format are left out."""
        rendered = AgentPrompt(role="r", task="t", context={}).render()

        assert "# CONTEXT" not in rendered
        assert "# INSTRUCTIONS" not in rendered
        assert "# OUTPUT FORMAT" not in rendered

    def test_no_feedback_section_by_default(self) -> None:
        """Without feedback there is no FEEDBACK section."""
        rendered = AgentPrompt(role="r", task="t", context={}).render()

        assert "# FEEDBACK" not in rendered

    def test_feedback_is_wrapped(self) -> None:
        """Feedback from a rejected attempt is appended with the wrapper."""
        prompt = AgentPrompt(role="r", task="t", context={})

        rendered = prompt.render(
            feedback="score: 120 is greater than the maximum of 100"
        )

        assert rendered.endswith(
            "# FEEDBACK\nSCHEMA REJECTION:\n"
            "score: 120 is greater than the maximum of 100\n"
            "Instruction: Return JSON that satisfies the output schema."
        )
