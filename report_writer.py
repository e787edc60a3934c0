#!/usr/bin/env python3
"""
CSV report writer for palaios

Writes one cleanup_<timestamp>.csv per run with the ranked directory list.
"""

import csv
import pathlib
from datetime import datetime
from typing import Optional

from dir_scanner import DirectoryRecord

REPORT_HEADER = ["Path", "Size", "Modified Date"]
REPORT_NAME_FORMAT = "cleanup_%Y-%m-%d_%H%M%S"


class ReportError(OSError):
    """Raised when the report file cannot be written"""


class ReportWriter:
    """Writes the durable record of a run"""

    def __init__(self, report_dir: pathlib.Path = pathlib.Path(".")):
        self.report_dir = pathlib.Path(report_dir)

    def report_path(self, now: Optional[datetime] = None) -> pathlib.Path:
        """Return the report file path for a run started at *now*"""
        stamp = (now or datetime.now()).strftime(REPORT_NAME_FORMAT)
        return self.report_dir / f"{stamp}.csv"

    def write(self, records: list[DirectoryRecord], now: Optional[datetime] = None) -> pathlib.Path:
        """Write the header and one row per record in the given order

        Raises:
            ReportError: If the file cannot be created or written
        """
        path = self.report_path(now)
        try:
            with path.open("w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                writer.writerow(REPORT_HEADER)
                for record in records:
                    writer.writerow([record.path, record.size_display, record.modified_display])
        except OSError as e:
            raise ReportError(f"Error creating file {path}: {e}") from e
        return path
