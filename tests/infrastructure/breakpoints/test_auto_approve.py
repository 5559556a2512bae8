"""Tests for AutoApproveHandler."""

from archflow.domain.models import BreakpointRequest
from archflow.infrastructure.breakpoints.auto import AutoApproveHandler


def _request(title: str) -> BreakpointRequest:
    return BreakpointRequest(
        breakpoint_id=f"bp-{title}", title=title, question="Approve?", context={}
    )


class TestAutoApproveHandler:
    """Tests for non-interactive decisions."""

    def test_approves_by_default(self) -> None:
        """Every request is approved by the auto responder."""
        decision = AutoApproveHandler().decide(_request("Review"))

        assert decision.approved is True
        assert decision.responder == "auto"

    def test_rejects_all(self) -> None:
        """approve=False rejects with the configured feedback."""
        decision = AutoApproveHandler(approve=False, feedback="Not yet").decide(
            _request("Review")
        )

        assert decision.approved is False
        assert decision.feedback == "Not yet"

    def test_rejects_listed_titles(self) -> None:
        """Titles in reject_titles are rejected, others approved."""
        handler = AutoApproveHandler(reject_titles=("Cost Budget Gate",))

        assert handler.decide(_request("Cost Budget Gate")).approved is False
        assert handler.decide(_request("Final Quality Gate")).approved is True

    def test_policy_overrides(self) -> None:
        """A policy callable decides each request."""
        handler = AutoApproveHandler(policy=lambda r: r.title.startswith("Iteration"))

        assert handler.decide(_request("Iteration 1 - Optimization Design Review")).approved
        assert not handler.decide(_request("Baseline Metrics Review")).approved

    def test_records_requests(self) -> None:
        """Requests and titles are recorded in order."""
        handler = AutoApproveHandler()
        handler.decide(_request("First"))
        handler.decide(_request("Second"))

        assert handler.titles == ["First", "Second"]
        assert len(handler.requests) == 2
