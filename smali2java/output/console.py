"""
Translation Console Output
===========================

Rich-powered terminal display for translation runs: a per-file status
table, the diagnostics raised by failed files, and a short summary.

Uses the :class:`Smali2JavaConsole` abstraction, which writes to
stderr, so the display never mixes with rendered units on stdout.
"""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from shared.console import Smali2JavaConsole
from shared.models import Diagnostic

from smali2java.core.models import (
    FileTranslationResult,
    TranslationRun,
    TranslationStatus,
)


_STATUS_STYLES: dict[str, str] = {
    TranslationStatus.OK.value: "bold green",
    TranslationStatus.MALFORMED.value: "bold yellow",
    TranslationStatus.IO_ERROR.value: "bold red",
}


def _status_cell(file: FileTranslationResult) -> str:
    style = _STATUS_STYLES.get(file.status.value, "")
    return f"[{style}]{file.status.value}[/{style}]" if style else file.status.value


class TranslationConsoleOutput:
    """Rich terminal display for :class:`TranslationRun` results.

    Usage::

        output = TranslationConsoleOutput()
        output.display(run)
    """

    def __init__(self, console: Smali2JavaConsole | None = None) -> None:
        self._console: Smali2JavaConsole = console or Smali2JavaConsole()

    def display(self, run: TranslationRun, *, show_files: bool = True) -> None:
        """Display the complete run.

        Args:
            run: The run to render.
            show_files: Include the per-file table.
        """
        self._console.section("Translation Summary")

        if show_files and run.files:
            self.display_files(run.files)

        if run.result.diagnostics:
            self.display_diagnostics(run.result.diagnostics)

        self.display_totals(run)

    def display_files(self, files: list[FileTranslationResult]) -> None:
        """Display one row per translated file."""
        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            padding=(0, 1),
        )
        tbl.add_column("#", style="dim", width=4, justify="right")
        tbl.add_column("File", style="bold")
        tbl.add_column("Status")
        tbl.add_column("In", justify="right")
        tbl.add_column("Out", justify="right")
        tbl.add_column("Passthrough", justify="right")

        for i, file in enumerate(files, 1):
            passthrough = file.unit.passthrough_count if file.unit is not None else 0
            tbl.add_row(
                str(i),
                escape(file.relative_path),
                _status_cell(file),
                str(file.input_lines),
                str(file.output_lines),
                str(passthrough) if file.ok else "-",
            )

        self._console.rich.print(tbl)
        self._console.blank()

    def display_diagnostics(self, diagnostics: list[Diagnostic]) -> None:
        """Display every diagnostic as a severity-coloured line."""
        for diag in diagnostics:
            style = diag.severity.style
            self._console.print(
                f"[{style}]{diag.severity.value}[/{style}] "
                f"{escape(diag.path)}: {escape(diag.title)}\n    [dim]{escape(diag.description)}[/dim]",
            )
        self._console.blank()

    def display_totals(self, run: TranslationRun) -> None:
        """Display the totals panel."""
        meta = run.result.metadata
        lines: list[str] = [
            f"[bold]Root:[/bold]         {escape(run.result.target)}",
            f"[bold]Files:[/bold]        {meta.get('files', len(run.files))}",
            f"[bold]Succeeded:[/bold]    {meta.get('succeeded', len(run.succeeded))}",
            f"[bold]Failed:[/bold]       {meta.get('failed', len(run.failed))}",
            f"[bold]Output lines:[/bold] {meta.get('output_lines', 0)}",
            f"[bold]Passthrough:[/bold]  {meta.get('passthrough_lines', 0)}",
        ]
        duration = run.result.duration_seconds
        if duration is not None:
            lines.append(f"[bold]Duration:[/bold]     {duration:.2f}s")

        border = "bright_red" if run.failed else "bright_green"
        panel = Panel(
            "\n".join(lines),
            title="[bold bright_cyan]smali2java[/bold bright_cyan]",
            border_style=border,
            padding=(0, 2),
        )
        self._console.rich.print(panel)
