#!/usr/bin/env python3
"""
Console UI Module using Rich

Styled messages, the ranked directory table, a progress bar for sizing and
deletion, and the interactive prompts of the cleanup workflow.
"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.prompt import Prompt
from rich.table import Table

from dir_scanner import DirectoryRecord

AFFIRMATIVE = ("y", "yes")


class ConsoleUI:
    """Console UI handler using Rich"""

    def __init__(self, force_terminal: Optional[bool] = None, console: Optional[Console] = None):
        """Initialize console with optional terminal forcing"""
        self.console = console or Console(force_terminal=force_terminal, highlight=False)

    # Basic styled output methods
    def print_success(self, message: str):
        """Print success message in green"""
        self.console.print(message, style="green")

    def print_error(self, message: str):
        """Print error message in red"""
        self.console.print(message, style="red bold")

    def print_warning(self, message: str):
        """Print warning message in yellow"""
        self.console.print(message, style="yellow")

    def print_info(self, message: str):
        """Print info message in cyan"""
        self.console.print(message, style="cyan")

    def print_plain(self, message: str):
        """Print message in plain white"""
        self.console.print(message, style="white", markup=False)

    def print_header(self, title: str, subtitle: Optional[str] = None):
        """Print a header with optional subtitle"""
        if subtitle:
            header_text = f"[bold]{title}[/bold]\n[dim]{subtitle}[/dim]"
        else:
            header_text = f"[bold]{title}[/bold]"

        panel = Panel(header_text, box=box.ROUNDED, padding=(0, 1))
        self.console.print(panel)

    def show_directory_listing(self, records: list[DirectoryRecord], title: Optional[str] = None):
        """Show ranked directories with their 1-based ordinals"""
        table = Table(title=title, box=box.ROUNDED, show_lines=False)
        table.add_column("#", justify="right", style="dim", min_width=3)
        table.add_column("Path", style="white", overflow="fold")
        table.add_column("Size", justify="right", style="yellow", min_width=6)
        table.add_column("Modified", style="cyan", min_width=19)

        for i, record in enumerate(records, 1):
            table.add_row(str(i), escape(record.path), escape(record.size_display), record.modified_display)

        self.console.print(table)
        self.console.print()

    def show_deletion_preview(self, records: list[DirectoryRecord]):
        """List the literal paths and sizes about to be deleted"""
        self.console.print()
        self.print_warning("The following directories will be deleted:")
        for record in records:
            self.print_plain(f"- {record.path} ({record.size_display})")
        self.console.print()

    def show_operation_summary(
        self, successful: list[str], failed: list[tuple], action: str = "delete", done: str = "deleted"
    ):
        """Show summary of completed operations"""
        if successful:
            self.print_success(f"Successfully {done} {len(successful)} directories")

        if failed:
            self.print_error(f"Failed to {action} {len(failed)} directories")

    # Progress bar management
    def create_progress(self) -> Progress:
        """Create a Rich progress context manager for batch operations"""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("({task.completed}/{task.total})"),
            TimeElapsedColumn(),
            console=self.console,
        )

    # Interactive prompts
    def prompt(self, question: str, default: Optional[str] = None) -> str:
        """Ask for free-text input"""
        try:
            return Prompt.ask(question, default=default, console=self.console)
        except EOFError:
            return ""

    def ask_yes_no(self, question: str) -> bool:
        """Ask a y/n question; anything but y/yes counts as no"""
        try:
            answer = Prompt.ask(f"{question} (y/n)", default="", show_default=False, console=self.console)
        except EOFError:
            return False
        return answer.strip().lower() in AFFIRMATIVE
