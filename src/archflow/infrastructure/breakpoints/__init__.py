"""Breakpoint handlers."""

from archflow.infrastructure.breakpoints.auto import AutoApproveHandler
from archflow.infrastructure.breakpoints.console import ConsoleBreakpointHandler

__all__ = ["AutoApproveHandler", "ConsoleBreakpointHandler"]
