"""
Smali2Java Console Interface
=============================

Rich-powered console abstraction providing a unified presentation layer
for status messages, section headers, and the banner.

All console output goes to stderr: stdout is the sink for rendered
Java units, so that ``smali2java src/ > out.java`` captures only code.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

# ---------------------------------------------------------------------------
# Theme -- consistent palette across all output
# ---------------------------------------------------------------------------
_S2J_THEME = Theme(
    {
        "s2j.banner": "bold bright_cyan",
        "s2j.section": "bold bright_magenta",
        "s2j.success": "bold green",
        "s2j.warning": "bold yellow",
        "s2j.error": "bold red",
                "s2j.dim": "dim white",
    }
)

_TAGLINE = "smali -> Java source rendering"


class Smali2JavaConsole:
    """Unified console interface for smali2java.

    Wraps :class:`rich.console.Console` with helpers for every
    presentation need of the tool.

    Usage::

        con = Smali2JavaConsole()
        con.banner()
        con.section("Translation Summary")
        con.success("12 files translated")
    """

    def __init__(self, *, quiet: bool = False, record: bool = False) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (useful in library / test mode).
            record: Enable Rich recording for text export.
        """
        self._console = Console(
            theme=_S2J_THEME,
            quiet=quiet,
            record=record,
            highlight=False,
            stderr=True,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    # ------------------------------------------------------------------ #
    #  Banner / headers
    # ------------------------------------------------------------------ #

    def banner(self, version: str = "1.0.0") -> None:
        """Display a one-panel banner with the tool name and version."""
        text = Text.from_markup(
            f"[s2j.banner]smali2java[/s2j.banner]  "
            f"[s2j.dim]{_TAGLINE}  |  v{version}[/s2j.dim]"
        )
        self._console.print(Panel(text, border_style="bright_cyan", expand=False))

    def section(self, title: str) -> None:
        """Print a prominent section header."""
        self._console.rule(
            f"  {title}  ",
            style="s2j.section",
            characters="─",
        )
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Message helpers
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        """Print a success message."""
        self._console.print(
            f"[s2j.success][✔] SUCCESS:[/s2j.success] {message}"
        )

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._console.print(
            f"[s2j.warning][⚠] WARNING:[/s2j.warning] {message}"
        )

    def error(self, message: str) -> None:
        """Print an error message."""
        self._console.print(
            f"[s2j.error][✘] ERROR:[/s2j.error] {message}"
        )

    # ------------------------------------------------------------------ #
    #  Utility
    # ------------------------------------------------------------------ #

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Proxy to :meth:`rich.console.Console.print`."""
        self._console.print(*args, **kwargs)

    def blank(self, count: int = 1) -> None:
        """Print *count* blank lines."""
        for _ in range(count):
            self._console.print()

    def export_text(self) -> str:
        """Export recorded console output as plain text (requires ``record=True``)."""
        return self._console.export_text()
