#!/usr/bin/env python3
"""
Palaios — Ancient Greek παλαιός (old, aged)

Finds dependency and environment folders (node_modules, .venv, .env) that
have not been modified for a number of days, ranks them by disk usage,
writes a CSV report and lets you pick which ones to delete.

Usage:
    palaios <path>                     # Scan, report and interactively delete
    palaios <path> --days 60           # Only folders untouched for 60+ days
    palaios <path> --dry-run           # Just write the report
    palaios <path> --size-method walk  # Measure sizes without calling du
    palaios --show-stats               # Show totals from previous runs
"""

import argparse
import logging
import pathlib
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rich.logging import RichHandler
from rich.markup import escape

from auxiliary import format_bytes, format_path_for_display, parse_selection
from console_ui import ConsoleUI
from dir_scanner import DirectoryRecord, scan_stale_directories
from file_operations import FileOperations
from palaios_config import ConfigManager
from report_writer import ReportError, ReportWriter
from size_probe import SIZE_METHODS, SizeProbe

logger = logging.getLogger("palaios")

# ---------------------------------------------------------------------------
# Workflow model
# ---------------------------------------------------------------------------


class Stage(Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    SIZING = "sizing"
    RANKING = "ranking"
    REPORTING = "reporting"
    DELETE_OFFER = "delete_offer"
    SELECTION_PROMPT = "selection_prompt"
    CONFIRM_PROMPT = "confirm_prompt"
    DELETING = "deleting"
    DONE = "done"


@dataclass
class DeletionOutcome:
    """Results of a deletion batch."""

    deleted: list[str] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)
    total_reclaimed: int = 0


def rank_records(records: list[DirectoryRecord]) -> list[DirectoryRecord]:
    """Sort records by byte count, largest first."""
    return sorted(records, key=lambda r: r.size_bytes, reverse=True)


# ---------------------------------------------------------------------------
# Interactive selection and deletion
# ---------------------------------------------------------------------------


class CleanupSession:
    """Prompt-driven selection, confirmation and deletion over ranked records.

    Each prompt is its own transition so the session can be stepped with
    canned answers.
    """

    def __init__(self, records: list[DirectoryRecord], ui: ConsoleUI, file_ops: Optional[FileOperations] = None):
        self.records = records
        self.ui = ui
        self.file_ops = file_ops or FileOperations(progress_callback=ui.print_plain)
        self.stage = Stage.DELETE_OFFER if records else Stage.DONE
        self.selected: list[int] = []
        self.outcome: Optional[DeletionOutcome] = None

    @property
    def selected_records(self) -> list[DirectoryRecord]:
        return [self.records[i] for i in self.selected]

    def offer_deletion(self) -> Stage:
        if self.ui.ask_yes_no("Would you like to delete any directories?"):
            self.stage = Stage.SELECTION_PROMPT
        else:
            self.stage = Stage.DONE
        return self.stage

    def choose(self) -> Stage:
        spec = self.ui.prompt("Enter the numbers of directories to delete (e.g., 1,2,3 or 1-3), or 'all'")
        self.selected = parse_selection(spec or "", len(self.records))
        if not self.selected:
            self.ui.print_warning("No valid directories selected.")
            self.stage = Stage.DONE
        else:
            self.stage = Stage.CONFIRM_PROMPT
        return self.stage

    def confirm_deletion(self) -> Stage:
        self.ui.show_deletion_preview(self.selected_records)
        if self.ui.ask_yes_no("Confirm deletion?"):
            self.stage = Stage.DELETING
        else:
            self.ui.print_info("No changes made.")
            self.stage = Stage.DONE
        return self.stage

    def delete(self) -> Stage:
        sizes = {r.path: r.size_bytes for r in self.records}
        operations = self.file_ops.plan_deletions([r.path for r in self.selected_records])
        successful, failed = self.file_ops.execute_batch_operations(operations)

        outcome = DeletionOutcome()
        for result in successful:
            outcome.deleted.append(result.operation.identifier)
            outcome.total_reclaimed += sizes.get(result.operation.identifier, 0)
        for result in failed:
            outcome.errors.append((result.operation.identifier, result.error_message or "unknown error"))
            self.ui.print_error(
                f"Error deleting {escape(result.operation.identifier)}: {escape(str(result.error_message))}"
            )

        self.outcome = outcome
        self.stage = Stage.DONE
        return self.stage

    def step(self) -> Stage:
        transitions = {
            Stage.DELETE_OFFER: self.offer_deletion,
            Stage.SELECTION_PROMPT: self.choose,
            Stage.CONFIRM_PROMPT: self.confirm_deletion,
            Stage.DELETING: self.delete,
        }
        if self.stage is Stage.DONE:
            return self.stage
        return transitions[self.stage]()

    def run(self) -> Optional[DeletionOutcome]:
        while self.stage is not Stage.DONE:
            self.step()
        return self.outcome


# ---------------------------------------------------------------------------
# Palaios
# ---------------------------------------------------------------------------


class Palaios:
    """Main application class for the Palaios stale dependency cleanup tool."""

    def __init__(
        self,
        args: argparse.Namespace,
        ui: Optional[ConsoleUI] = None,
        config_manager: Optional[ConfigManager] = None,
    ):
        self.args = args
        self.ui = ui or ConsoleUI()
        self.config_manager = config_manager or ConfigManager(getattr(args, "config_dir", None))
        self.config = self.config_manager.load()
        self.stage = Stage.IDLE

    # -- settings ------------------------------------------------------------

    @property
    def days(self) -> int:
        days = getattr(self.args, "days", None)
        return self.config.default_days if days is None else days

    @property
    def report_dir(self) -> pathlib.Path:
        return pathlib.Path(getattr(self.args, "report_dir", None) or self.config.report_dir)

    @property
    def size_method(self) -> str:
        return getattr(self.args, "size_method", None) or self.config.size_method

    # -- stages ----------------------------------------------------------------

    def scan(self, root: str) -> list[DirectoryRecord]:
        self.stage = Stage.SCANNING
        self.ui.print_header(
            "Palaios",
            f"Finding directories older than {self.days} days in {escape(format_path_for_display(root))}",
        )
        records = scan_stale_directories(root, self.days)
        logger.debug("Found %d stale directories under %s", len(records), root)
        return records

    def measure(self, records: list[DirectoryRecord]) -> list[DirectoryRecord]:
        self.stage = Stage.SIZING
        probe = SizeProbe(self.size_method)
        if not records:
            return records

        self.ui.print_info(f"Calculating sizes for {len(records)} directories...")
        progress = self.ui.create_progress()
        with progress:
            task = progress.add_task("Calculating sizes...", total=len(records))

            def _advance(index: int, total: int, record: DirectoryRecord):
                progress.update(task, description=f"Calculating size {index}/{total}: {escape(record.path)}")
                progress.advance(task)

            probe.probe_all(records, _advance)

        return records

    def rank(self, records: list[DirectoryRecord]) -> list[DirectoryRecord]:
        self.stage = Stage.RANKING
        return rank_records(records)

    def report(self, records: list[DirectoryRecord]) -> pathlib.Path:
        """Write the CSV report and show the listing. Raises ReportError."""
        self.stage = Stage.REPORTING
        path = ReportWriter(self.report_dir).write(records)

        if records:
            self.ui.print_info(f"Found directories older than {self.days} days:")
            self.ui.show_directory_listing(records)
        else:
            self.ui.print_success("No matching directories found.")
        self.ui.print_info(f"Results written to: {escape(str(path))}")
        return path

    def summary(self, outcome: DeletionOutcome):
        self.ui.console.print()
        self.ui.print_info("Deletion complete!")
        self.ui.show_operation_summary(outcome.deleted, outcome.errors)
        if outcome.deleted:
            self.ui.print_success(f"  Reclaimed {format_bytes(outcome.total_reclaimed)}")

        self.config.record_run(outcome.total_reclaimed)
        try:
            self.config_manager.save(self.config)
        except OSError as e:
            self.ui.print_warning(f"Could not save run statistics: {escape(str(e))}")

    def show_stats(self):
        stats = self.config.stats
        self.ui.print_info(f"Runs with deletions: {stats.get('total_runs', 0)}")
        self.ui.print_info(f"Total reclaimed: {format_bytes(stats.get('total_reclaimed_bytes', 0))}")
        self.ui.print_info(f"Last run: {self.config.last_run or 'never'}")

    # -- main entry point ----------------------------------------------------

    def run(self) -> int:
        if getattr(self.args, "show_stats", False):
            self.show_stats()
            return 0

        path = self.args.path
        if not pathlib.Path(path).is_dir():
            self.ui.print_error(f"Not a directory: {escape(path)}")
            return 1

        if self.size_method not in SIZE_METHODS:
            self.ui.print_error(f"Unknown size method: {escape(self.size_method)}")
            return 1

        records = self.scan(path)
        records = self.measure(records)
        records = self.rank(records)

        try:
            self.report(records)
        except ReportError as e:
            self.ui.print_error(escape(str(e)))
            return 1

        if getattr(self.args, "dry_run", False) or not records:
            self.stage = Stage.DONE
            return 0

        self.ui.console.print()
        session = CleanupSession(records, self.ui)
        outcome = session.run()
        self.stage = Stage.DONE

        if outcome is not None:
            self.summary(outcome)
        return 0


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _non_negative_int(value: str) -> int:
    days = int(value)
    if days < 0:
        raise argparse.ArgumentTypeError("must be zero or more")
    return days


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="palaios",
        description="Palaios — find and delete stale node_modules, .venv and .env directories",
    )
    parser.add_argument("path", nargs="?", help="Directory to search")
    parser.add_argument("-p", "--path", dest="path_option", help="Directory to search (alternative to positional)")
    parser.add_argument("-d", "--days", type=_non_negative_int, default=None, help="Minimum age in days (default 30)")
    parser.add_argument("--report-dir", default=None, help="Directory for the cleanup_<timestamp>.csv report")
    parser.add_argument("--size-method", choices=SIZE_METHODS, default=None, help="How to measure directory sizes")
    parser.add_argument("--dry-run", action="store_true", help="Write the report without offering deletion")
    parser.add_argument("--show-stats", action="store_true", help="Show statistics from previous runs")
    parser.add_argument("--config-dir", type=pathlib.Path, default=None, help="Override the ~/.palaios directory")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def configure_logging(ui: ConsoleUI, debug: bool = False):
    """Route the palaios.* loggers through Rich on the UI console."""
    handler = RichHandler(console=ui.console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.path = args.path or args.path_option

    ui = ConsoleUI()
    configure_logging(ui, args.debug)

    if not args.path and not args.show_stats:
        parser.print_usage()
        ui.print_error("Please provide a path to search.")
        return 1

    app = Palaios(args, ui=ui)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
