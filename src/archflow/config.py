"""Configuration loading for the archflow CLI."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ConfigurationError(Exception):
    """Raised when configuration files are invalid or missing."""

    pass


class RunnerSettings(BaseModel):
    """Settings for the agent executor and the process runner."""

    model_config = ConfigDict(extra="forbid")

    model: str = "qwen2.5:14b"
    host: str = "http://localhost:11434"
    api_key: str | None = None
    timeout: float = Field(default=300.0, gt=0)
    temperature: float = Field(default=0.2, ge=0, le=2)
    max_attempts: int = Field(default=2, ge=1)
    max_workers: int = Field(default=8, ge=1)
    run_dir: str = ".archflow/runs"
    auto_approve: bool = False


def _read_json(path: Path, kind: str) -> Any:
    if not path.exists():
        raise ConfigurationError(f"{kind} file not found: {path}")

    try:
        with open(path) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e


def load_inputs(path: Path) -> dict[str, Any]:
    """
    Load process inputs from a JSON file.

    Raises:
        ConfigurationError: If file is missing, invalid or not an object
    """
    data = _read_json(path, "Inputs")
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected dict in {path}, got {type(data).__name__}")
    return data


def load_settings(path: Path | None = None, **overrides: Any) -> RunnerSettings:
    """
    Load runner settings from an optional JSON file.

    Keyword overrides (e.g. CLI options) win over file values; None
    overrides are ignored.

    Raises:
        ConfigurationError: If the file is missing, invalid or has unknown fields
    """
    data: dict[str, Any] = {}
    if path is not None:
        loaded = _read_json(path, "Settings")
        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Expected dict in {path}, got {type(loaded).__name__}"
            )
        data.update(loaded)

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return RunnerSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e


def normalize_base_url(url: str) -> str:
    """
    Normalize base URL for OpenAI-compatible API.

    Ensures /v1 suffix for Ollama/OpenAI compatible endpoints.
    """
    base_url = url.rstrip("/")
    if not base_url.endswith("/v1"):
        base_url = f"{base_url}/v1"
    return base_url
