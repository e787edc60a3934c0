import os
import time
from datetime import datetime
from pathlib import Path

import pytest

from dir_scanner import TARGET_NAMES, DirectoryRecord, scan_stale_directories

DAY = 86400


def _make_dir(path: Path, age_days: float) -> Path:
    """Create a directory (with a file inside) and backdate it."""
    path.mkdir(parents=True, exist_ok=True)
    (path / "placeholder.txt").write_text("x")
    stamp = time.time() - age_days * DAY
    os.utime(path, (stamp, stamp))
    return path


def _paths(records: list[DirectoryRecord]) -> set[str]:
    return {r.path for r in records}


def test_target_names() -> None:
    assert TARGET_NAMES == {"node_modules", ".venv", ".env"}


def test_scan_records_stale_and_skips_fresh(tmp_path: Path) -> None:
    stale = _make_dir(tmp_path / "a" / "node_modules", 60)
    _make_dir(tmp_path / "a" / ".venv", 5)
    other = _make_dir(tmp_path / "b" / "node_modules", 40)

    records = scan_stale_directories(str(tmp_path), 30)

    assert _paths(records) == {str(stale), str(other)}


def test_scan_does_not_descend_into_stale_match(tmp_path: Path) -> None:
    inner = tmp_path / "app" / "node_modules" / "pkg" / "node_modules"
    _make_dir(inner, 90)
    outer = _make_dir(tmp_path / "app" / "node_modules", 90)

    records = scan_stale_directories(str(tmp_path), 30)

    assert _paths(records) == {str(outer)}


def test_scan_does_not_descend_into_fresh_match(tmp_path: Path) -> None:
    _make_dir(tmp_path / "app" / ".venv" / "lib" / ".env", 90)
    _make_dir(tmp_path / "app" / ".venv", 1)

    records = scan_stale_directories(str(tmp_path), 30)

    assert records == []


def test_scan_descends_into_other_directories(tmp_path: Path) -> None:
    deep = _make_dir(tmp_path / "x" / "y" / "z" / ".env", 45)

    records = scan_stale_directories(str(tmp_path), 30)

    assert _paths(records) == {str(deep)}


def test_scan_ignores_files_with_target_names(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("SECRET=1")
    stamp = time.time() - 90 * DAY
    os.utime(tmp_path / ".env", (stamp, stamp))

    assert scan_stale_directories(str(tmp_path), 30) == []


def test_scan_ignores_other_names(tmp_path: Path) -> None:
    _make_dir(tmp_path / "venv", 90)
    _make_dir(tmp_path / "node_modules_old", 90)

    assert scan_stale_directories(str(tmp_path), 30) == []


def test_scan_cutoff_is_inclusive(tmp_path: Path) -> None:
    target = _make_dir(tmp_path / "node_modules", 0)
    now = datetime.fromtimestamp(os.stat(target).st_mtime)

    records = scan_stale_directories(str(tmp_path), 0, now=now)

    assert _paths(records) == {str(target)}


def test_scan_records_modification_time(tmp_path: Path) -> None:
    target = _make_dir(tmp_path / "node_modules", 100)

    (record,) = scan_stale_directories(str(tmp_path), 30)

    assert record.last_modified == datetime.fromtimestamp(os.stat(target).st_mtime)
    assert record.size_bytes == 0
    assert record.size_display == ""


def test_scan_matches_root_itself(tmp_path: Path) -> None:
    root = _make_dir(tmp_path / "node_modules", 60)
    _make_dir(root / "dep" / ".venv", 60)
    os.utime(root, (time.time() - 60 * DAY, time.time() - 60 * DAY))

    records = scan_stale_directories(str(root), 30)

    assert _paths(records) == {str(root)}


def test_scan_does_not_follow_or_match_symlinks(tmp_path: Path) -> None:
    real = _make_dir(tmp_path / "real" / "deps", 90)
    (tmp_path / "proj").mkdir()
    os.symlink(real, tmp_path / "proj" / "node_modules")

    assert scan_stale_directories(str(tmp_path), 30) == []


def test_scan_missing_root_is_not_fatal(tmp_path: Path) -> None:
    assert scan_stale_directories(str(tmp_path / "missing"), 30) == []


@pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root ignores permissions")
def test_scan_skips_unreadable_directories(tmp_path: Path) -> None:
    locked = tmp_path / "locked"
    _make_dir(locked / "node_modules", 90)
    found = _make_dir(tmp_path / "open" / "node_modules", 90)
    locked.chmod(0)
    try:
        records = scan_stale_directories(str(tmp_path), 30)
    finally:
        locked.chmod(0o755)

    assert _paths(records) == {str(found)}


def test_record_modified_display() -> None:
    record = DirectoryRecord("/p/node_modules", datetime(2024, 3, 5, 7, 8, 9))
    assert record.modified_display == "2024-03-05 07:08:09"
