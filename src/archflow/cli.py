"""
archflow command line.

Usage:
    archflow list
    archflow describe software-architecture/event-storming
    archflow run software-architecture/event-storming --inputs inputs.json
    archflow run software-architecture/iac-review --inputs iac.json \\
        --settings settings.json --auto-approve --output result.json
    archflow run software-architecture/c4-model-documentation \\
        --inputs c4.json --run-id run-1a2b3c4d5e6f   # resume
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from archflow.application.runner import ProcessRunner, new_run_id
from archflow.config import (
    ConfigurationError,
    RunnerSettings,
    load_inputs,
    load_settings,
    normalize_base_url,
)
from archflow.console import (
    console,
    display_run_result,
    print_error,
    print_header,
    print_process_details,
    print_process_table,
    print_run_info,
)
from archflow.domain.exceptions import InvalidProcessInputs, ProcessNotFound
from archflow.domain.interfaces import BreakpointHandlerInterface
from archflow.domain.models import ProcessRunResult
from archflow.infrastructure.agents import (
    OpenAIAgentConfig,
    OpenAIAgentExecutor,
    ShellExecutor,
)
from archflow.infrastructure.breakpoints import (
    AutoApproveHandler,
    ConsoleBreakpointHandler,
)
from archflow.infrastructure.persistence import FilesystemTaskJournal
from archflow.infrastructure.registry import ProcessRegistry
from archflow.logging_setup import setup_logging

logger = logging.getLogger("archflow")


def build_runner(settings: RunnerSettings, workdir: Path) -> ProcessRunner:
    """Wire the OpenAI agent, shell executor, breakpoints and filesystem journal."""
    agent = OpenAIAgentExecutor(
        OpenAIAgentConfig(
            model=settings.model,
            base_url=normalize_base_url(settings.host),
            api_key=settings.api_key,
            timeout=settings.timeout,
            temperature=settings.temperature,
        )
    )
    breakpoints: BreakpointHandlerInterface
    if settings.auto_approve:
        breakpoints = AutoApproveHandler()
    else:
        breakpoints = ConsoleBreakpointHandler(console=console, base_dir=workdir)

    run_root = Path(settings.run_dir)
    return ProcessRunner(
        agent=agent,
        breakpoints=breakpoints,
        shell=ShellExecutor(cwd=workdir),
        journal_factory=lambda run_id: FilesystemTaskJournal(run_root / run_id),
        max_attempts=settings.max_attempts,
        max_workers=settings.max_workers,
    )


@click.group()
def main() -> None:
    """Run multi-phase software-architecture processes."""


@main.command("list")
def list_processes() -> None:
    """List registered processes."""
    print_process_table(
        [ProcessRegistry.metadata(pid) for pid in ProcessRegistry.available()]
    )


@main.command()
@click.argument("process_id")
def describe(process_id: str) -> None:
    """Show a process's inputs, outputs and tasks."""
    try:
        meta = ProcessRegistry.metadata(process_id)
    except ProcessNotFound as e:
        print_error(str(e), "Run 'archflow list' to see available processes.")
        sys.exit(1)
    print_process_details(meta)


@main.command()
@click.argument("process_id")
@click.option(
    "--inputs",
    "inputs_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the process inputs JSON",
)
@click.option(
    "--settings",
    "settings_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to runner settings JSON",
)
@click.option("--model", default=None, help="Override the model from settings")
@click.option("--host", default=None, help="OpenAI-compatible API URL")
@click.option("--run-id", default=None, help="Resume an existing run from its journal")
@click.option(
    "--run-dir", default=None, type=click.Path(), help="Directory for run journals"
)
@click.option(
    "--auto-approve",
    is_flag=True,
    help="Approve every breakpoint without prompting",
)
@click.option(
    "--output",
    default=None,
    type=click.Path(),
    help="Path to save the run result JSON",
)
@click.option("--log-file", default=None, type=click.Path(), help="Path to log file")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose (DEBUG) logging to console",
)
def run(
    process_id: str,
    inputs_path: str,
    settings_path: str | None,
    model: str | None,
    host: str | None,
    run_id: str | None,
    run_dir: str | None,
    auto_approve: bool,
    output: str | None,
    log_file: str | None,
    verbose: bool,
) -> None:
    """Run a process to completion."""
    setup_logging("archflow", log_file=log_file, verbose=verbose)

    try:
        inputs = load_inputs(Path(inputs_path))
        settings = load_settings(
            Path(settings_path) if settings_path else None,
            model=model,
            host=host,
            run_dir=run_dir,
            auto_approve=auto_approve or None,
        )
    except ConfigurationError as e:
        print_error(str(e), "Check that your JSON files exist and are valid.")
        sys.exit(1)

    run_id = run_id or new_run_id()
    print_header("archflow", process_id)
    print_run_info(
        process_id,
        settings.model,
        settings.host,
        str(Path(settings.run_dir) / run_id),
        settings.auto_approve,
    )

    runner = build_runner(settings, Path.cwd())
    try:
        result = runner.run(process_id, inputs, run_id=run_id)
    except ProcessNotFound as e:
        print_error(str(e), "Run 'archflow list' to see available processes.")
        sys.exit(1)
    except InvalidProcessInputs as e:
        print_error(str(e), f"Run 'archflow describe {process_id}' to see its inputs.")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print(f"\n[yellow]Interrupted. Resume with --run-id {run_id}[/yellow]")
        sys.exit(130)

    if output:
        _save_result(Path(output), _result_payload(result))

    display_run_result(result)
    if output:
        console.print(f"\nResults saved to: {output}")

    sys.exit(0 if result.success else 1)


def _result_payload(result: ProcessRunResult) -> dict[str, Any]:
    return {
        "runId": result.run_id,
        "processId": result.process_id,
        "status": result.status.value,
        "error": result.error,
        "durationMs": result.duration_ms,
        "output": result.output,
    }


def _save_result(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2, default=str)
    logger.debug("Saved run result to %s", path)


if __name__ == "__main__":
    main()
