"""
Task executors: LLM agents, mocks and shell commands.
"""

from archflow.infrastructure.agents.mock import MockAgentExecutor
from archflow.infrastructure.agents.openai_agent import (
    OpenAIAgentConfig,
    OpenAIAgentExecutor,
)
from archflow.infrastructure.agents.shell import ShellExecutor

__all__ = [
    "MockAgentExecutor",
    "OpenAIAgentConfig",
    "OpenAIAgentExecutor",
    "ShellExecutor",
]
