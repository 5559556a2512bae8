"""
Application layer for archflow.

Contains the process runtime: the per-run context, process definitions
and the runner.
"""

from archflow.application.context import ParallelRunner, ProcessContext
from archflow.application.events import RunEventEmitter
from archflow.application.process import ProcessDefinition, ProcessInputs, process
from archflow.application.runner import ProcessRunner, new_run_id

__all__ = [
    "ParallelRunner",
    "ProcessContext",
    "ProcessDefinition",
    "ProcessInputs",
    "ProcessRunner",
    "RunEventEmitter",
    "new_run_id",
    "process",
]
