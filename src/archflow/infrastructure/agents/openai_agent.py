"""
OpenAI-compatible agent executor.

Connects to any OpenAI-compatible chat endpoint (OpenAI, Ollama, vLLM)
and asks for a JSON object matching the task's output schema.
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from typing import Any, cast

from openai import OpenAI

from archflow.domain.exceptions import AgentResponseError
from archflow.domain.interfaces import TaskExecutorInterface
from archflow.domain.models import TaskDefinition

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434/v1"

SYSTEM_PROMPT = (
    "You are a software architecture consultant executing one step of a "
    "larger process. Respond with a single JSON object only, no prose. "
    "The object must satisfy this JSON Schema:\n{schema}"
)


@dataclass
class OpenAIAgentConfig:
    """Configuration for OpenAIAgentExecutor.

    This typed config ensures unknown fields are rejected at construction time.
    """

    model: str = "qwen2.5:14b"
    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = None
    timeout: float = 300.0
    temperature: float = 0.2
    json_mode: bool = True


class OpenAIAgentExecutor(TaskExecutorInterface):
    """Executes agent tasks against an OpenAI-compatible API."""

    config_class = OpenAIAgentConfig

    def __init__(self, config: OpenAIAgentConfig | None = None, **kwargs: Any):
        if config is None:
            config = OpenAIAgentConfig(**kwargs)

        self._config = config
        self._client = OpenAI(
            base_url=config.base_url,
            # Local endpoints require a key but ignore it
            api_key=config.api_key or os.environ.get("OPENAI_API_KEY") or "ollama",
            timeout=config.timeout,
        )

    def execute(
        self, task: TaskDefinition, args: dict[str, Any], feedback: str | None = None
    ) -> dict[str, Any]:
        if task.agent is None:
            raise ValueError(f"Task '{task.task_id}' is not an agent task")

        messages = [
            {
                "role": "system",
                "content": SYSTEM_PROMPT.format(
                    schema=json.dumps(task.agent.output_schema, indent=2)
                ),
            },
            {"role": "user", "content": task.agent.prompt.render(feedback)},
        ]
        request: dict[str, Any] = {
            "model": self._config.model,
            "messages": cast(Any, messages),
            "temperature": self._config.temperature,
        }
        if self._config.json_mode:
            request["response_format"] = {"type": "json_object"}

        logger.debug("Calling %s for %s", self._config.model, task.effect_id)
        response = self._client.chat.completions.create(**request)
        content = response.choices[0].message.content or ""
        return self._parse_json(content, task)

    def _parse_json(self, content: str, task: TaskDefinition) -> dict[str, Any]:
        """Extract a JSON object from the reply."""
        text = content.strip()

        # Try fenced block
        match = re.search(r"```(?:json)?\s*\n(.*?)\n```", text, re.DOTALL)
        if match:
            text = match.group(1)

        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            # Fall back to the outermost braces
            start, end = text.find("{"), text.rfind("}")
            if start == -1 or end <= start:
                raise AgentResponseError(
                    f"Agent reply for '{task.task_id}' contained no JSON object"
                ) from None
            try:
                data = json.loads(text[start : end + 1])
            except json.JSONDecodeError as e:
                raise AgentResponseError(
                    f"Agent reply for '{task.task_id}' is not valid JSON: {e}"
                ) from e

        if not isinstance(data, dict):
            raise AgentResponseError(
                f"Agent reply for '{task.task_id}' is a {type(data).__name__}, "
                "expected an object"
            )
        return data
