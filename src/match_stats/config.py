"""Load statistics run definitions from TOML files."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from match_stats.win_rate import DayBucketing

LOCAL_TIMEZONE = "local"


@dataclass(frozen=True)
class StatisticsConfig:
    """One statistics run: which history window to read and which calendar buckets days."""

    name: str
    description: str | None
    file_path: Path
    lookback_days: int = 0
    day_timezone: str = LOCAL_TIMEZONE

    def day_bucketing(self) -> DayBucketing:
        if self.day_timezone == LOCAL_TIMEZONE:
            return DayBucketing()
        return DayBucketing(timezone=ZoneInfo(self.day_timezone))


def load_statistics_configs(config_dir: Path) -> list[StatisticsConfig]:
    """Load and validate all statistics TOML config files in a directory."""
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    configs: list[StatisticsConfig] = []
    for file_path in config_files:
        with file_path.open("rb") as file:
            configs.append(_parse_statistics_config(tomllib.load(file), file_path))

    names = [config.name for config in configs]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate statistics config names found in {config_dir}: {names}")

    return configs


def _parse_statistics_config(raw: dict[str, Any], file_path: Path) -> StatisticsConfig:
    system_raw = raw.get("system", {})
    statistics_raw = raw.get("statistics", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    lookback_days = int(system_raw.get("lookback_days", 0))
    if lookback_days < 0:
        raise ValueError(f"{file_path}: [system].lookback_days must be >= 0")

    day_timezone = str(statistics_raw.get("day_timezone", LOCAL_TIMEZONE)).strip() or LOCAL_TIMEZONE
    if day_timezone != LOCAL_TIMEZONE:
        try:
            ZoneInfo(day_timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(
                f"{file_path}: [statistics].day_timezone {day_timezone!r} is not a known timezone"
            ) from exc

    return StatisticsConfig(
        name=name,
        description=description,
        file_path=file_path,
        lookback_days=lookback_days,
        day_timezone=day_timezone,
    )


__all__ = ["LOCAL_TIMEZONE", "StatisticsConfig", "load_statistics_configs"]
