"""Tests for ConsoleBreakpointHandler with scripted prompt answers."""

import io
from collections.abc import Callable
from typing import Any

import pytest
from rich.console import Console

from archflow.domain.models import BreakpointRequest
from archflow.infrastructure.breakpoints import console as console_module
from archflow.infrastructure.breakpoints.console import ConsoleBreakpointHandler


@pytest.fixture
def output() -> io.StringIO:
    """Buffer capturing console output."""
    return io.StringIO()


@pytest.fixture
def handler(output: io.StringIO, tmp_path) -> ConsoleBreakpointHandler:  # noqa: ANN001
    """Handler writing to a buffer with files under tmp_path."""
    return ConsoleBreakpointHandler(
        console=Console(file=output, width=120), base_dir=tmp_path
    )


@pytest.fixture
def answers(monkeypatch: pytest.MonkeyPatch) -> Callable[..., list[dict[str, Any]]]:
    """Script Prompt.ask answers; returns the recorded prompt calls."""

    def _script(*replies: str) -> list[dict[str, Any]]:
        queue = list(replies)
        calls: list[dict[str, Any]] = []

        def fake_ask(prompt: str, **kwargs: Any) -> str:
            calls.append({"prompt": prompt, **kwargs})
            return queue.pop(0)

        monkeypatch.setattr(console_module.Prompt, "ask", fake_ask)
        return calls

    return _script


def _request(files: list[dict[str, Any]] | None = None) -> BreakpointRequest:
    context: dict[str, Any] = {"runId": "run-1", "summary": {"userCount": 3}}
    if files is not None:
        context["files"] = files
    return BreakpointRequest(
        breakpoint_id="bp-1",
        title="C4 Context Diagram Review",
        question="Approve to proceed to Container diagram?",
        context=context,
    )


class TestConsoleBreakpointHandler:
    """Tests for interactive decisions."""

    def test_approve(
        self,
        handler: ConsoleBreakpointHandler,
        answers: Callable[..., list[dict[str, Any]]],
        output: io.StringIO,
    ) -> None:
        """Answering y approves and shows the question and summary."""
        calls = answers("y")

        decision = handler.decide(_request())

        assert decision.approved is True
        assert decision.responder == "console"
        assert calls[0]["choices"] == ["y", "n"]
        text = output.getvalue()
        assert "C4 Context Diagram Review" in text
        assert "run-1" in text
        assert "userCount" in text

    def test_reject_asks_reason(
        self,
        handler: ConsoleBreakpointHandler,
        answers: Callable[..., list[dict[str, Any]]],
    ) -> None:
        """Answering n asks for a reason recorded as feedback."""
        answers("n", "Missing payment provider")

        decision = handler.decide(_request())

        assert decision.approved is False
        assert decision.feedback == "Missing payment provider"

    def test_view_files_then_approve(
        self,
        handler: ConsoleBreakpointHandler,
        answers: Callable[..., list[dict[str, Any]]],
        output: io.StringIO,
        tmp_path,  # noqa: ANN001
    ) -> None:
        """With files, v previews them before asking again."""
        (tmp_path / "context.puml").write_text(
            "@startuml\nPerson(user, \"Shopper\")\n@enduml\n"
        )
        calls = answers("v", "y")

        decision = handler.decide(
            _request(
                [
                    {"path": "context.puml", "format": "plantuml", "label": "Context"},
                    {"path": "missing.md", "format": "markdown"},
                ]
            )
        )

        assert decision.approved is True
        assert calls[0]["choices"] == ["y", "n", "v"]
        text = output.getvalue()
        assert "Shopper" in text
        assert "File not found" in text

    def test_view_inline_content(
        self,
        handler: ConsoleBreakpointHandler,
        answers: Callable[..., list[dict[str, Any]]],
        output: io.StringIO,
    ) -> None:
        """Files with inline content are shown without reading the disk."""
        answers("v", "y")

        decision = handler.decide(
            _request(
                [
                    {
                        "path": "iac-review-output/phase4-cost-analysis.json",
                        "format": "json",
                        "content": '{"estimatedMonthlyCost": 12000}',
                    }
                ]
            )
        )

        assert decision.approved is True
        text = output.getvalue()
        assert "estimatedMonthlyCost" in text
        assert "12000" in text
        assert "File not found" not in text

    def test_question_shown_in_panel(
        self,
        handler: ConsoleBreakpointHandler,
        answers: Callable[..., list[dict[str, Any]]],
        output: io.StringIO,
    ) -> None:
        """Title and question are framed in a panel."""
        answers("y")

        handler.decide(_request())

        lines = output.getvalue().splitlines()
        [top] = [line for line in lines if "C4 Context Diagram Review" in line]
        assert top.startswith("╭")
        assert any(
            "Approve to proceed" in line and line.startswith("│") for line in lines
        )
