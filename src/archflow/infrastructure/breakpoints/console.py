"""
Interactive breakpoint handler.

Blocks the process until a human approves or rejects via CLI prompts.
"""

import json
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from archflow.domain.interfaces import BreakpointHandlerInterface
from archflow.domain.models import BreakpointDecision, BreakpointRequest

PREVIEW_LINES = 60


class ConsoleBreakpointHandler(BreakpointHandlerInterface):
    """
    Blocks the process until human approval.

    Shows the breakpoint question, its summary and the files under review,
    then asks for approve (y), reject (n) or view files (v). A rejection
    asks for a reason, which is recorded as the decision's feedback.

    Files carrying inline `content` are shown as is; other paths are
    read relative to `base_dir`.
    """

    def __init__(
        self,
        console: Console | None = None,
        base_dir: str | Path | None = None,
        responder: str = "console",
    ):
        self.console = console or Console()
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self.responder = responder

    def decide(self, request: BreakpointRequest) -> BreakpointDecision:
        header = Text(request.question)
        header.append(f"\n\nRun: {request.context.get('runId', '?')}", style="dim")
        self.console.print(
            Panel(header, title=request.title, border_style="yellow")
        )

        summary = request.context.get("summary")
        if summary:
            self.console.print("\n[dim]Summary:[/dim]")
            self.console.print(Syntax(json.dumps(summary, indent=2), "json"))

        if request.files:
            table = Table(show_header=True, box=None)
            table.add_column("File", style="cyan")
            table.add_column("Format", style="magenta")
            table.add_column("Label")
            for ref in request.files:
                table.add_row(
                    str(ref.get("path", "")),
                    str(ref.get("format", "")),
                    str(ref.get("label", "")),
                )
            self.console.print(table)

        choices = ["y", "n", "v"] if request.files else ["y", "n"]
        decision = Prompt.ask(
            "\n[bold]Approve and continue?[/bold]",
            choices=choices,
            console=self.console,
        )

        if decision == "v":
            self._show_files(request)
            decision = Prompt.ask(
                "\n[bold]Approve?[/bold]", choices=["y", "n"], console=self.console
            )

        if decision == "y":
            return BreakpointDecision(approved=True, responder=self.responder)
        reason = Prompt.ask("[bold]Rejection reason[/bold]", console=self.console)
        return BreakpointDecision(
            approved=False, feedback=reason, responder=self.responder
        )

    def _show_files(self, request: BreakpointRequest) -> None:
        for ref in request.files:
            path = self.base_dir / str(ref.get("path", ""))
            self.console.print(f"\n[dim]--- {path} ---[/dim]")
            content = ref.get("content")
            if content is None:
                if not path.is_file():
                    self.console.print("[red]File not found[/red]")
                    continue
                content = path.read_text(errors="replace")
            lines = str(content).splitlines()
            preview = "\n".join(lines[:PREVIEW_LINES])
            lexer = ref.get("language") or ref.get("format") or "text"
            self.console.print(Syntax(preview, lexer, line_numbers=True))
            if len(lines) > PREVIEW_LINES:
                remaining = len(lines) - PREVIEW_LINES
                self.console.print(f"[dim]... {remaining} more lines[/dim]")
