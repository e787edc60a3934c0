#!/usr/bin/env python3
"""
Configuration management for palaios

Persists defaults (age threshold, report directory, size method) and run
statistics in ~/.palaios/config.json.
"""

import json
import pathlib
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Optional


def _default_stats() -> dict:
    return {"total_runs": 0, "total_reclaimed_bytes": 0}


@dataclass
class PalaiosConfig:
    """Configuration for palaios"""

    default_days: int = 30
    report_dir: str = "."
    size_method: str = "du"
    last_run: Optional[str] = None
    stats: dict = field(default_factory=_default_stats)

    def record_run(self, reclaimed: int):
        """Update run statistics after a deletion batch"""
        self.stats["total_runs"] = self.stats.get("total_runs", 0) + 1
        self.stats["total_reclaimed_bytes"] = self.stats.get("total_reclaimed_bytes", 0) + reclaimed
        self.last_run = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PalaiosConfig":
        """Create from dictionary"""
        stats = _default_stats()
        stats.update(data.get("stats", {}))
        return cls(
            default_days=int(data.get("default_days", 30)),
            report_dir=data.get("report_dir", "."),
            size_method=data.get("size_method", "du"),
            last_run=data.get("last_run"),
            stats=stats,
        )


class ConfigManager:
    """Loads and saves the palaios configuration file"""

    def __init__(self, config_dir: Optional[pathlib.Path] = None):
        """Initialize configuration manager

        Args:
            config_dir: Override default .palaios directory location
        """
        if config_dir:
            self.config_dir = pathlib.Path(config_dir)
        else:
            self.config_dir = pathlib.Path.home() / ".palaios"

        self.config_file = self.config_dir / "config.json"

    def load(self) -> PalaiosConfig:
        """Load configuration from file"""
        if not self.config_file.exists():
            return PalaiosConfig()
        try:
            with self.config_file.open() as f:
                return PalaiosConfig.from_dict(json.load(f))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError):
            # If config is corrupted, return default
            return PalaiosConfig()

    def save(self, config: PalaiosConfig):
        """Save configuration to file"""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with self.config_file.open("w") as f:
            json.dump(config.to_dict(), f, indent=2)
