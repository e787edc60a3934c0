#!/usr/bin/env python3
"""
Directory Scanner Module for palaios

Walks a directory tree looking for dependency/environment folders
(node_modules, .venv, .env) that have not been touched for a number of days.
Matched folders are never descended into, stale or not.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

TARGET_NAMES = frozenset({"node_modules", ".venv", ".env"})

MODIFIED_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("palaios.scanner")


@dataclass
class DirectoryRecord:
    """A stale target directory found during a scan"""

    path: str
    last_modified: datetime
    size_display: str = ""
    size_bytes: int = 0

    @property
    def modified_display(self) -> str:
        return self.last_modified.strftime(MODIFIED_FORMAT)


def _check_target(path: str, cutoff: datetime, records: list[DirectoryRecord]):
    """Record *path* if it is old enough. Errors skip the node."""
    try:
        mtime = datetime.fromtimestamp(os.lstat(path).st_mtime)
    except OSError as e:
        logger.debug("Skipping %s: %s", path, e)
        return
    if mtime > cutoff:
        logger.debug("Skipping fresh %s (modified %s)", path, mtime.strftime(MODIFIED_FORMAT))
        return
    records.append(DirectoryRecord(path=path, last_modified=mtime))


def scan_stale_directories(root: str, days: int, now: Optional[datetime] = None) -> list[DirectoryRecord]:
    """Find target directories under *root* last modified *days* or more ago

    Args:
        root: Directory to walk
        days: Age threshold in days
        now: Reference time for the cutoff (defaults to the current time)

    Returns:
        Records (path and modification time only) in traversal order
    """
    cutoff = (now or datetime.now()) - timedelta(days=days)
    records: list[DirectoryRecord] = []

    # The walk visits the root node itself first
    if os.path.basename(os.path.normpath(root)) in TARGET_NAMES and not os.path.islink(root):
        _check_target(root, cutoff, records)
        return records

    def _on_error(error: OSError):
        logger.debug("Skipping unreadable node %s: %s", error.filename, error)

    for dirpath, dirs, _files in os.walk(root, topdown=True, onerror=_on_error, followlinks=False):
        matched: set[str] = set()
        for d in dirs:
            if d not in TARGET_NAMES:
                continue
            full = os.path.join(dirpath, d)
            if os.path.islink(full):
                continue
            matched.add(d)
            _check_target(full, cutoff, records)

        # Prune matched dirs so we don't descend into them
        dirs[:] = [d for d in dirs if d not in matched]

    return records
