"""
Rich terminal output utilities for HotRefactor CLI.

Provides tables for offered refactorings and highlighted source and diffs,
with a plain-text mode for pipes and dumb terminals.
"""

from typing import Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table


class RichOutputManager:
    """Manages rich terminal output with a plain-text mode."""

    def __init__(self, use_rich: bool = True, console: Optional[Console] = None):
        """Initialize the output manager."""
        self.use_rich = use_rich
        self.console = console or Console(highlight=use_rich, no_color=not use_rich)

    def _plain(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def print_header(self, title: str, subtitle: Optional[str] = None) -> None:
        """Print a formatted header."""
        if self.use_rich:
            if subtitle:
                header_text = f"[bold blue]{title}[/bold blue]\n[dim]{subtitle}[/dim]"
            else:
                header_text = f"[bold blue]{title}[/bold blue]"

            self.console.print(Panel(header_text, border_style="blue", padding=(0, 2)))
        else:
            self._plain(f"=== {title} ===")
            if subtitle:
                self._plain(subtitle)

    def print_success(self, message: str) -> None:
        """Print a success message."""
        if self.use_rich:
            self.console.print(f"[green]✓[/green] {message}")
        else:
            self._plain(f"✓ {message}")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        if self.use_rich:
            self.console.print(f"[yellow]⚠[/yellow] {message}")
        else:
            self._plain(f"⚠ {message}")

    def print_info(self, message: str) -> None:
        """Print an info message."""
        if self.use_rich:
            self.console.print(f"[blue]ℹ[/blue] {message}")
        else:
            self._plain(f"ℹ {message}")

    def print_actions(self, titles: Sequence[str], providers: Sequence[str]) -> None:
        """Print the offered refactorings as a numbered table."""
        if self.use_rich:
            table = Table(show_header=True, header_style="bold blue")
            table.add_column("#", justify="right")
            table.add_column("Refactoring")
            table.add_column("Provider", style="dim")
            for index, (title, provider) in enumerate(zip(titles, providers), 1):
                table.add_row(str(index), title, provider)
            self.console.print(table)
        else:
            for index, title in enumerate(titles, 1):
                self._plain(f"{index}. {title}")

    def print_code(self, code: str, language: str = "csharp") -> None:
        """Print source code, highlighted when rich output is on."""
        if self.use_rich:
            self.console.print(Syntax(code, language, theme="monokai", line_numbers=True))
        else:
            self._plain(code)

    def print_diff(self, diff: str) -> None:
        """Print a unified diff."""
        if not diff:
            self.print_info("No changes")
            return
        if self.use_rich:
            self.console.print(Syntax(diff, "diff", theme="monokai"))
        else:
            self._plain(diff.rstrip("\n"))


# Global instance
rich_output = RichOutputManager()


def set_rich_enabled(enabled: bool) -> None:
    """Enable or disable rich output globally."""
    global rich_output
    rich_output = RichOutputManager(use_rich=enabled)


def get_rich_output() -> RichOutputManager:
    """Get the global rich output manager."""
    return rich_output
