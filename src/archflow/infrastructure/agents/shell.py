"""
Shell executor for command tasks (e.g. `terraform validate`).
"""

import logging
import subprocess
from pathlib import Path
from typing import Any

from archflow.domain.interfaces import TaskExecutorInterface
from archflow.domain.models import TaskDefinition

logger = logging.getLogger(__name__)


class ShellExecutor(TaskExecutorInterface):
    """Runs a task's shell command and reports the outcome as JSON."""

    def __init__(self, cwd: str | Path | None = None):
        self._cwd = Path(cwd) if cwd else None

    def execute(
        self, task: TaskDefinition, args: dict[str, Any], feedback: str | None = None
    ) -> dict[str, Any]:
        if task.shell is None:
            raise ValueError(f"Task '{task.task_id}' is not a shell task")

        logger.info("Running: %s", task.shell.command)
        try:
            proc = subprocess.run(
                task.shell.command,
                shell=True,
                cwd=self._cwd,
                capture_output=True,
                text=True,
                timeout=task.shell.timeout,
            )
        except subprocess.TimeoutExpired:
            return {
                "success": False,
                "valid": False,
                "exitCode": None,
                "stdout": "",
                "stderr": "",
                "errors": [f"Timed out after {task.shell.timeout}s"],
                "artifacts": [],
            }

        ok = proc.returncode == 0
        errors: list[str] = []
        if not ok:
            errors = [line for line in proc.stderr.splitlines() if line.strip()]
            errors = errors or [f"Exit code {proc.returncode}"]
        return {
            "success": ok,
            "valid": ok,
            "exitCode": proc.returncode,
            "stdout": proc.stdout[-10000:],
            "stderr": proc.stderr[-10000:],
            "errors": errors,
            "artifacts": [],
        }
