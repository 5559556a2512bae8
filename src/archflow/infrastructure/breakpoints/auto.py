"""
Non-interactive breakpoint handler for tests, CI and unattended runs.
"""

import logging
from collections.abc import Callable
from threading import Lock

from archflow.domain.interfaces import BreakpointHandlerInterface
from archflow.domain.models import BreakpointDecision, BreakpointRequest

logger = logging.getLogger(__name__)


class AutoApproveHandler(BreakpointHandlerInterface):
    """
    Decides every breakpoint without a human.

    Args:
        approve: Default verdict
        feedback: Feedback attached to each decision
        reject_titles: Titles to reject regardless of the default verdict
        policy: Optional callable overriding the verdict per request
    """

    def __init__(
        self,
        approve: bool = True,
        feedback: str = "",
        reject_titles: tuple[str, ...] = (),
        policy: Callable[[BreakpointRequest], bool] | None = None,
    ):
        self._approve = approve
        self._feedback = feedback
        self._reject_titles = reject_titles
        self._policy = policy
        self._lock = Lock()
        self.requests: list[BreakpointRequest] = []

    def decide(self, request: BreakpointRequest) -> BreakpointDecision:
        with self._lock:
            self.requests.append(request)

        if self._policy is not None:
            approved = self._policy(request)
        else:
            approved = self._approve and request.title not in self._reject_titles

        logger.info(
            "Auto-%s breakpoint: %s",
            "approved" if approved else "rejected",
            request.title,
        )
        return BreakpointDecision(
            approved=approved, feedback=self._feedback, responder="auto"
        )

    @property
    def titles(self) -> list[str]:
        """Titles of every breakpoint seen, in order."""
        return [r.title for r in self.requests]
