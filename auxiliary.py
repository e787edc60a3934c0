#!/usr/bin/env python3
"""
Auxiliary utility functions for palaios

Size formatting and parsing helpers plus the selection grammar used by the
interactive cleanup prompt.
"""

import pathlib
import re
from typing import Optional

# Powers of 1024, matching what `du -h` prints
SIZE_MULTIPLIERS = {
    "B": 1,
    "K": 1024,
    "M": 1024**2,
    "G": 1024**3,
    "T": 1024**4,
}

_SIZE_TOKEN_RE = re.compile(r"^\s*([0-9]*\.?[0-9]+(?:[eE][-+]?[0-9]+)?)(\S*)")
_ORDINAL_RE = re.compile(r"^[0-9]+\Z")


def format_bytes(size_bytes: int) -> str:
    """Format byte size into human-readable string

    Args:
        size_bytes: Size in bytes to format

    Returns:
        Formatted string like "1.2 GiB", "345 MiB", "12 KiB", or "789 B"
    """
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.1f} GiB"
    if size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MiB"
    if size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KiB"
    return f"{size_bytes} B"


def format_du_size(size_bytes: int) -> str:
    """Format a byte count the way `du -sh` does ("1.2G", "500M", "12K", "0")"""
    if size_bytes <= 0:
        return "0"
    for unit in ("T", "G", "M", "K"):
        mult = SIZE_MULTIPLIERS[unit]
        if size_bytes >= mult:
            value = size_bytes / mult
            return f"{value:.1f}{unit}" if value < 10 else f"{round(value)}{unit}"
    return f"{size_bytes}B"


def parse_size_token(token: str) -> tuple[float, str]:
    """Split a size token like "1.2G" into its magnitude and unit

    Raises:
        ValueError: If the token does not start with a number
    """
    match = _SIZE_TOKEN_RE.match(token)
    if not match:
        raise ValueError(f"Not a size: {token!r}")
    return float(match.group(1)), match.group(2)


def convert_to_bytes(size: float, unit: str) -> int:
    """Convert a magnitude and unit suffix into a byte count

    The unit is case-folded and a trailing "B" is dropped, so "GB", "G" and
    "gb" are equivalent. Unknown units yield 0 rather than an error.
    """
    unit = unit.upper()
    if unit.endswith("B"):
        unit = unit[:-1] or "B"
    mult = SIZE_MULTIPLIERS.get(unit)
    if mult is None:
        return 0
    return int(size * mult)


def _ordinal(text: str) -> Optional[int]:
    """Return the integer for a plain ASCII digit string, else None"""
    text = text.strip()
    if not _ORDINAL_RE.match(text):
        return None
    return int(text)


def parse_selection(spec: str, count: int) -> list[int]:
    """Parse an operator selection like "1,3-5" or "all" into 0-based indices

    Ordinals are 1-based. Out-of-range ordinals and malformed tokens are
    dropped. Ranges are inclusive and clipped to the list. Order follows the
    tokens as given and duplicates are kept.
    """
    tokens = [t.strip() for t in spec.strip().lower().split(",")]
    if "all" in tokens:
        return list(range(count))

    indices: list[int] = []
    for token in tokens:
        if "-" in token:
            parts = token.split("-")
            if len(parts) != 2:
                continue
            start, end = _ordinal(parts[0]), _ordinal(parts[1])
            if start is None or end is None:
                continue
            indices.extend(i for i in range(start - 1, end) if 0 <= i < count)
        else:
            num = _ordinal(token)
            if num is not None and 1 <= num <= count:
                indices.append(num - 1)
    return indices


def format_path_for_display(path: str, home_path: Optional[str] = None) -> str:
    """Format file path for display by replacing home directory with ~

    Args:
        path: File path to format
        home_path: Home directory path (defaults to platform home)

    Returns:
        Path with home directory replaced by ~ if applicable
    """
    if home_path is None:
        home_path = str(pathlib.Path.home())

    return path.replace(home_path, "~")
