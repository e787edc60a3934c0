#!/usr/bin/env python3
"""
Size Probe Module for palaios

Measures the total size of each scanned directory, either by shelling out to
`du -sh` or with a native walk over the tree. Both report a du-style display
string ("1.2G") and a byte count.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Callable, Optional

from auxiliary import convert_to_bytes, format_du_size, parse_size_token
from dir_scanner import DirectoryRecord

SIZE_ERROR = "error"

SIZE_METHODS = ("du", "walk")

logger = logging.getLogger("palaios.size_probe")


class SizeProbeError(RuntimeError):
    """Raised when a directory size cannot be measured"""


def _dir_size(path: str) -> int:
    """Return total bytes for a directory tree."""
    total = 0
    for dirpath, _dirnames, filenames in os.walk(path, followlinks=False):
        for f in filenames:
            try:
                total += os.lstat(Path(dirpath) / f).st_size
            except OSError:
                pass
    return total


class SizeProbe:
    """Measures directory sizes one at a time"""

    def __init__(self, method: str = "du"):
        """Initialize size probe

        Args:
            method: "du" to invoke `du -sh`, "walk" to sum file sizes natively
        """
        if method not in SIZE_METHODS:
            raise ValueError(f"Size method must be one of {', '.join(SIZE_METHODS)}")
        self.method = method

    def measure(self, path: str) -> tuple[str, int]:
        """Return (display size, byte count) for *path*

        Raises:
            SizeProbeError: If the measurement fails or its output is unusable
        """
        if self.method == "walk":
            if not os.path.isdir(path):
                raise SizeProbeError(f"Not a directory: {path}")
            size = _dir_size(path)
            return format_du_size(size), size

        try:
            completed = subprocess.run(["du", "-sh", path], capture_output=True, text=True, check=True)
        except (OSError, subprocess.SubprocessError) as e:
            raise SizeProbeError(f"du failed for {path}: {e}") from e

        fields = completed.stdout.split()
        if not fields:
            raise SizeProbeError(f"du returned no output for {path}")

        display = fields[0]
        try:
            size, unit = parse_size_token(display)
        except ValueError as e:
            raise SizeProbeError(str(e)) from e
        return display, convert_to_bytes(size, unit)

    def probe_all(
        self,
        records: list[DirectoryRecord],
        progress_callback: Optional[Callable[[int, int, DirectoryRecord], None]] = None,
    ) -> list[DirectoryRecord]:
        """Fill in sizes for every record, marking failures with the error sentinel

        Args:
            records: Scanned records, updated in place
            progress_callback: Called as (index, total, record) after each record

        Returns:
            The same records
        """
        total = len(records)
        for i, record in enumerate(records):
            try:
                record.size_display, record.size_bytes = self.measure(record.path)
            except SizeProbeError as e:
                logger.debug("Size probe failed: %s", e)
                record.size_display = SIZE_ERROR
                record.size_bytes = 0

            if progress_callback:
                progress_callback(i + 1, total, record)

        return records
