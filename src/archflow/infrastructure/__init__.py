"""
Infrastructure layer for archflow.

Adapters for agents, breakpoints, task journals and process discovery.
"""

from archflow.infrastructure.agents import (
    MockAgentExecutor,
    OpenAIAgentConfig,
    OpenAIAgentExecutor,
    ShellExecutor,
)
from archflow.infrastructure.breakpoints import (
    AutoApproveHandler,
    ConsoleBreakpointHandler,
)
from archflow.infrastructure.persistence import (
    FilesystemTaskJournal,
    InMemoryTaskJournal,
)
from archflow.infrastructure.registry import ProcessRegistry

__all__ = [
    # Agents
    "MockAgentExecutor",
    "OpenAIAgentConfig",
    "OpenAIAgentExecutor",
    "ShellExecutor",
    # Breakpoints
    "AutoApproveHandler",
    "ConsoleBreakpointHandler",
    # Persistence
    "FilesystemTaskJournal",
    "InMemoryTaskJournal",
    # Discovery
    "ProcessRegistry",
]
