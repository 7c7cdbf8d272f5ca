from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Frequency(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def schedule_code(self) -> str:
        return self.value.upper()

    @property
    def unit(self) -> str:
        return _UNITS[self]


_UNITS = {
    Frequency.HOURLY: "hour",
    Frequency.DAILY: "day",
    Frequency.WEEKLY: "week",
    Frequency.MONTHLY: "month",
}

# Trigger day used when the schedule needs one.
_DEFAULT_DAYS = {
    Frequency.WEEKLY: "MON",
    Frequency.MONTHLY: "1",
}


@dataclass(frozen=True)
class ScheduleSpec:
    frequency: Frequency
    interval: int
    day: str | None = None

    @classmethod
    def for_frequency(cls, frequency: Frequency, interval: int) -> "ScheduleSpec":
        return cls(frequency=frequency, interval=int(interval), day=_DEFAULT_DAYS.get(frequency))


@dataclass
class CleanupReport:
    folder: Path
    deleted_files: int = 0
    deleted_folders: int = 0
    skipped: int = 0
    bytes_before: int = 0
    bytes_after: int = 0
    failed_paths: list[Path] = field(default_factory=list)

    @property
    def bytes_freed(self) -> int:
        """Difference of the two size scans; skewed if something wrote to the folder meanwhile."""
        return self.bytes_before - self.bytes_after
