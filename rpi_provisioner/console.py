from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.theme import Theme

THEME = Theme(
    {
        "info": "blue",
        "success": "green",
        "warning": "bold yellow",
        "error": "red",
        "header": "bold magenta",
        "label": "bold white",
        "panel.border": "cyan",
    }
)


class StatusConsole:
    """Colored one-line status output for the operator."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(theme=THEME, highlight=False)

    def _line(self, style: str, prefix: str, message: str) -> None:
        self.console.print(f"{prefix} {message}", style=style, markup=False)

    def info(self, message: str) -> None:
        self._line("info", "ℹ", message)

    def success(self, message: str) -> None:
        self._line("success", "✓", message)

    def warning(self, message: str) -> None:
        self._line("warning", "⚠", message)

    def error(self, message: str) -> None:
        self._line("error", "✗", message)

    def header(self, title: str) -> None:
        self.console.print()
        self.console.print(f"🚀 {title}", style="header", markup=False)

    def panel(self, title: str, rows: list[tuple[str, str]]) -> None:
        body = "\n".join(f"[label]{escape(k)}:[/label] {escape(v)}" for k, v in rows)
        self.console.print(Panel(body, title=title, title_align="left", border_style="panel.border"))
