"""Rich console utilities for the archflow CLI."""

from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from archflow.domain.models import ProcessMetadata, ProcessRunResult

# Shared console instances
console = Console()
error_console = Console(stderr=True)


def print_header(title: str, subtitle: str | None = None) -> None:
    """Print a styled header panel."""
    content = Text(title, style="bold blue")
    if subtitle:
        content.append(f"\n{subtitle}", style="dim")
    console.print(Panel(content, expand=False))


def print_error(message: str, hint: str | None = None) -> None:
    """Print formatted error message to stderr."""
    content = Text(f"ERROR: {message}", style="bold red")
    if hint:
        content.append(f"\n\nHint: {hint}", style="yellow")
    error_console.print(Panel(content, title="Error", border_style="red"))


def print_success(message: str) -> None:
    console.print(Panel(message, title="Success", border_style="green"))


def print_failure(message: str, details: str | None = None) -> None:
    content = Text(message, style="bold red")
    if details:
        content.append(f"\n{details}", style="dim")
    console.print(Panel(content, title="Failed", border_style="red"))


def print_process_table(processes: Sequence[ProcessMetadata]) -> None:
    """Print registered processes with their task counts."""
    table = Table(show_header=True, box=None)
    table.add_column("Process", style="cyan")
    table.add_column("Tasks", justify="right")
    table.add_column("Description")

    for meta in processes:
        table.add_row(meta.process_id, str(len(meta.tasks)), meta.description)

    console.print(table)


def print_process_details(meta: ProcessMetadata) -> None:
    """Print one process's inputs, outputs and tasks."""
    print_header(meta.process_id, meta.description)
    console.print(f"\n[bold]Inputs:[/bold] {', '.join(meta.inputs) or '(none)'}")
    console.print(f"[bold]Outputs:[/bold] {', '.join(meta.outputs) or '(none)'}")
    console.print("\n[bold]Tasks:[/bold]")
    for task_id in meta.tasks:
        console.print(f"  {task_id}")


def print_run_info(
    process_id: str,
    model: str,
    host: str,
    run_dir: str,
    auto_approve: bool,
    extra_info: dict[str, Any] | None = None,
) -> None:
    """Print run configuration info table."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    table.add_row("Process", process_id)
    table.add_row("Model", model)
    table.add_row("Host", host)
    table.add_row("Run dir", run_dir)
    table.add_row("Breakpoints", "auto-approve" if auto_approve else "console")

    if extra_info:
        for key, value in extra_info.items():
            table.add_row(key, str(value))

    console.print(table)


def display_run_result(result: ProcessRunResult) -> None:
    """Print the outcome of a run with its headline numbers."""
    if result.success:
        print_success(f"Run {result.run_id} completed in {result.duration_ms} ms")
    else:
        print_failure(f"Run {result.run_id} {result.status.value}", result.error)

    headline = {
        key: value
        for key, value in result.output.items()
        if isinstance(value, int | float | str | bool) and key != "error"
    }
    if headline:
        table = Table(show_header=False, box=None)
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for key, value in headline.items():
            table.add_row(key, str(value))
        console.print(table)

    artifacts = result.output.get("artifacts") or []
    if isinstance(artifacts, dict):
        # Keyed by artifact kind rather than a list of file refs
        console.print(f"\n[bold]Artifacts:[/bold] {', '.join(artifacts)}")
    elif artifacts:
        console.print(f"\n[bold]Artifacts ({len(artifacts)}):[/bold]")
        for artifact in artifacts:
            path = artifact.get("path") if isinstance(artifact, dict) else artifact
            console.print(f"  {path}")
