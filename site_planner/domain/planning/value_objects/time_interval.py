"""
Time Interval Value Object

A half-open span [start, end) of wall-clock time. Used for scheduled item
slots, worker busy time and ledger commitments.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class TimeInterval:
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError("End time must not be before start time")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: TimeInterval) -> bool:
        """Two intervals overlap when each starts before the other ends."""
        return self.start < other.end and self.end > other.start

    def contains(self, point: datetime) -> bool:
        return self.start <= point < self.end

    def __str__(self) -> str:
        return f"{self.start:%Y-%m-%d %H:%M} - {self.end:%Y-%m-%d %H:%M}"
