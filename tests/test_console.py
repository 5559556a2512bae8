"""Tests for the rich console printers."""

import io
from typing import Any

import pytest
from rich.console import Console

from archflow.console import display_run_result
from archflow.domain.models import ProcessRunResult, RunStatus


@pytest.fixture
def output(monkeypatch: pytest.MonkeyPatch) -> io.StringIO:
    """Send the shared console to a buffer."""
    buffer = io.StringIO()
    monkeypatch.setattr("archflow.console.console", Console(file=buffer, width=200))
    return buffer


def _result(
    output: dict[str, Any], status: RunStatus = RunStatus.COMPLETED
) -> ProcessRunResult:
    return ProcessRunResult(
        run_id="run-1",
        process_id="software-architecture/event-storming",
        status=status,
        output=output,
        error=None if status == RunStatus.COMPLETED else "Breakpoint 'X' rejected",
        duration_ms=1200,
    )


class TestDisplayRunResult:
    """Tests for display_run_result."""

    def test_artifact_list(self, output: io.StringIO) -> None:
        """File ref artifacts are listed by path."""
        display_run_result(
            _result(
                {
                    "success": True,
                    "artifacts": [
                        {"path": "c4/context.puml", "format": "plantuml"},
                        {"path": "c4/README.md"},
                    ],
                }
            )
        )

        text = output.getvalue()
        assert "Artifacts (2)" in text
        assert "c4/context.puml" in text
        assert "c4/README.md" in text

    def test_artifact_mapping(self, output: io.StringIO) -> None:
        """Artifacts keyed by kind show their keys."""
        display_run_result(
            _result(
                {
                    "success": True,
                    "artifacts": {"eventTimeline": {"events": []}, "commands": []},
                }
            )
        )

        text = output.getvalue()
        assert "eventTimeline, commands" in text

    def test_headline_values(self, output: io.StringIO) -> None:
        """Scalar outputs are shown; nested ones are not."""
        display_run_result(
            _result({"success": True, "qualityScore": 88, "domainModel": {"a": 1}})
        )

        text = output.getvalue()
        assert "completed in 1200 ms" in text
        assert "qualityScore" in text
        assert "domainModel" not in text

    def test_failure_panel(self, output: io.StringIO) -> None:
        """Non-completed runs show their status and error."""
        display_run_result(_result({}, RunStatus.REJECTED))

        text = output.getvalue()
        assert "run-1 rejected" in text
        assert "Breakpoint 'X' rejected" in text
