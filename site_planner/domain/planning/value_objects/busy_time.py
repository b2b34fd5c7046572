"""
Busy Time Value Object

A worker's calendar exceptions arrive as a compact list of day slots:
"YYYYMMDD:startHour-endHour[,YYYYMMDD:startHour-endHour...]", for example
"20251124:9-13,20251125:14-18". Each slot blocks whole hours on one day.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ...shared.parsing import is_blank
from .time_interval import TimeInterval


@dataclass(frozen=True)
class BusySlot:
    day: date
    start_hour: int
    end_hour: int

    def __post_init__(self):
        if not 0 <= self.start_hour <= self.end_hour <= 24:
            raise ValueError(
                f"Invalid busy hours: {self.start_hour}-{self.end_hour}"
            )

    @property
    def interval(self) -> TimeInterval:
        midnight = datetime.combine(self.day, time())
        return TimeInterval(
            midnight + timedelta(hours=self.start_hour),
            midnight + timedelta(hours=self.end_hour),
        )

    def __str__(self) -> str:
        return f"{self.day:%Y%m%d}:{self.start_hour}-{self.end_hour}"


def _parse_slot(fragment: str) -> BusySlot | None:
    day_text, sep, hours_text = fragment.partition(":")
    if not sep or len(day_text) != 8 or not day_text.isdigit():
        return None
    try:
        day = datetime.strptime(day_text, "%Y%m%d").date()
    except ValueError:
        return None

    hour_parts = hours_text.split("-")
    if len(hour_parts) != 2:
        return None
    try:
        start_hour = int(hour_parts[0].strip())
        end_hour = int(hour_parts[1].strip())
        return BusySlot(day, start_hour, end_hour)
    except ValueError:
        return None


def parse_busy_time(text: str | None) -> list[BusySlot]:
    """Parse a busy-time list, skipping malformed slots."""
    if is_blank(text):
        return []
    slots = []
    for fragment in str(text).split(","):
        fragment = fragment.strip()
        if not fragment:
            continue
        slot = _parse_slot(fragment)
        if slot is not None:
            slots.append(slot)
    return slots


def format_busy_time(slots: list[BusySlot]) -> str:
    return ",".join(str(slot) for slot in slots)
