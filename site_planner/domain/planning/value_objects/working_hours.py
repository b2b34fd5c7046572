"""
Working Hours Value Object

Represents the working day of a construction site: a day start hour, a day
end hour and a one-hour lunch break. Provides the calendar arithmetic used to
place work items: advancing an instant by working minutes, checking whether a
short item fits in the rest of a day, and moving instants out of
non-working time.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ...shared.exceptions import InvalidWorkingHoursError

LUNCH_DURATION = timedelta(hours=1)


@dataclass(frozen=True)
class WorkingHours:
    """
    Daily working hours with a lunch break.
    Hours are whole hours on a 24-hour clock; day_end may be 24.
    """

    day_start: int = 9
    day_end: int = 18
    lunch_start: int = 13

    def __post_init__(self):
        """Validate the day layout."""
        if not (
            0 <= self.day_start < self.lunch_start
            and self.lunch_start + 1 <= self.day_end <= 24
        ):
            raise InvalidWorkingHoursError(
                self.day_start, self.day_end, self.lunch_start
            )

    @property
    def working_minutes_per_day(self) -> int:
        """Working minutes in one full day, lunch excluded."""
        return (self.day_end - self.day_start - 1) * 60

    def day_start_on(self, day: date) -> datetime:
        return datetime.combine(day, time()) + timedelta(hours=self.day_start)

    def day_end_on(self, day: date) -> datetime:
        return datetime.combine(day, time()) + timedelta(hours=self.day_end)

    def lunch_start_on(self, day: date) -> datetime:
        return datetime.combine(day, time()) + timedelta(hours=self.lunch_start)

    def lunch_end_on(self, day: date) -> datetime:
        return self.lunch_start_on(day) + LUNCH_DURATION

    def next_day_start(self, instant: datetime) -> datetime:
        """Day start on the calendar day after the given instant."""
        return self.day_start_on(instant.date() + timedelta(days=1))

    def is_working_time(self, instant: datetime) -> bool:
        day = instant.date()
        if instant < self.day_start_on(day) or instant >= self.day_end_on(day):
            return False
        return not (self.lunch_start_on(day) <= instant < self.lunch_end_on(day))

    def next_working_instant(self, instant: datetime) -> datetime:
        """
        Move an instant out of non-working time.

        Before day start goes to day start, inside the lunch hour goes to the
        end of lunch, at or after day end goes to the next day start. Working
        instants are returned unchanged.
        """
        day = instant.date()
        if instant < self.day_start_on(day):
            return self.day_start_on(day)
        if instant >= self.day_end_on(day):
            return self.next_day_start(instant)
        if self.lunch_start_on(day) <= instant < self.lunch_end_on(day):
            # Lunch may close the day
            if self.lunch_end_on(day) >= self.day_end_on(day):
                return self.next_day_start(instant)
            return self.lunch_end_on(day)
        return instant

    def working_minutes_left(self, instant: datetime) -> float:
        """Working minutes between the instant and the end of its day."""
        day = instant.date()
        current = max(instant, self.day_start_on(day))
        lunch_start = self.lunch_start_on(day)
        lunch_end = self.lunch_end_on(day)
        day_end = self.day_end_on(day)

        available = timedelta()
        if current < lunch_start:
            available += lunch_start - current
        afternoon_from = max(current, lunch_end)
        if afternoon_from < day_end:
            available += day_end - afternoon_from
        return available.total_seconds() / 60

    def fits_before_next_break(self, start: datetime, minutes: float) -> bool:
        """True if the duration can finish on the start's own day."""
        return minutes <= self.working_minutes_left(start)

    def advance(self, start: datetime, minutes: float) -> datetime:
        """
        Advance an instant by working minutes.

        Consumes the smallest of the remaining time, the time until lunch and
        the time until day end; entering the lunch hour skips exactly one hour,
        reaching day end rolls over to the next day start, and an instant
        before day start moves to day start. A duration ending exactly on a
        break boundary returns that boundary.
        """
        current = start
        remaining = timedelta(minutes=minutes)

        while remaining > timedelta():
            day = current.date()
            day_start = self.day_start_on(day)
            day_end = self.day_end_on(day)
            lunch_start = self.lunch_start_on(day)
            lunch_end = self.lunch_end_on(day)

            if current < day_start:
                current = day_start
                continue
            if current >= day_end:
                current = self.next_day_start(current)
                continue
            if lunch_start <= current < lunch_end:
                current = lunch_end
                continue

            boundary = lunch_start if current < lunch_start else day_end
            step = min(remaining, boundary - current)
            current += step
            remaining -= step

        return current

    def __str__(self) -> str:
        return (
            f"{self.day_start:02d}:00 - {self.day_end:02d}:00 "
            f"(lunch {self.lunch_start:02d}:00)"
        )


def advance(start: datetime, minutes: float, hours: WorkingHours) -> datetime:
    """Advance start by working minutes under the given hours."""
    return hours.advance(start, minutes)


def fits_before_next_break(
    start: datetime, minutes: float, hours: WorkingHours
) -> bool:
    """True if a duration started at start would not cross a day boundary."""
    return hours.fits_before_next_break(start, minutes)
