"""
Unit Tests for the WorkingHours Value Object

Covers day layout validation, moving instants out of non-working time, the
remaining working minutes of a day and advancing instants by working minutes
across lunch breaks and day boundaries.
"""

from datetime import datetime, timedelta

import pytest
from hypothesis import given, settings, strategies as st

from site_planner.domain.planning.value_objects.working_hours import (
    WorkingHours,
    advance,
    fits_before_next_break,
)
from site_planner.domain.shared.exceptions import InvalidWorkingHoursError

from ..fixtures import at

HOURS = WorkingHours()


class TestWorkingHoursLayout:
    """Test validation of the working day."""

    def test_defaults(self):
        """Test the default nine-to-six day with lunch at one."""
        assert HOURS.day_start == 9
        assert HOURS.day_end == 18
        assert HOURS.lunch_start == 13
        assert HOURS.working_minutes_per_day == 480

    @pytest.mark.parametrize(
        "day_start,day_end,lunch_start",
        [
            (9, 13, 13),  # lunch does not fit in the day
            (13, 18, 12),  # lunch before day start
            (9, 25, 13),  # day end past midnight
            (-1, 18, 13),
            (9, 18, 9),  # lunch at day start
        ],
    )
    def test_invalid_layout_raises(self, day_start, day_end, lunch_start):
        """Test inconsistent layouts are rejected."""
        with pytest.raises(InvalidWorkingHoursError) as exc_info:
            WorkingHours(day_start, day_end, lunch_start)

        assert exc_info.value.error_code == "INVALID_WORKING_HOURS"
        assert exc_info.value.to_dict()["field"] == "working_hours"

    def test_lunch_may_close_the_day(self):
        """Test a day that ends right after lunch is valid."""
        hours = WorkingHours(day_start=9, day_end=14, lunch_start=13)

        assert hours.working_minutes_per_day == 240
        assert hours.next_working_instant(at(13, 30)) == at(9, day_offset=1)

    def test_day_end_may_be_midnight(self):
        """Test day_end of 24 is accepted."""
        hours = WorkingHours(day_start=0, day_end=24, lunch_start=12)

        assert hours.day_end_on(at(0).date()) == at(0, day_offset=1)

    def test_str(self):
        assert str(HOURS) == "09:00 - 18:00 (lunch 13:00)"


class TestNextWorkingInstant:
    """Test moving instants out of non-working time."""

    def test_before_day_start(self):
        assert HOURS.next_working_instant(at(7, 15)) == at(9)

    def test_inside_lunch(self):
        assert HOURS.next_working_instant(at(13, 20)) == at(14)

    def test_at_day_end(self):
        assert HOURS.next_working_instant(at(18)) == at(9, day_offset=1)

    def test_working_instant_unchanged(self):
        assert HOURS.next_working_instant(at(10, 45)) == at(10, 45)
        assert HOURS.next_working_instant(at(14)) == at(14)

    def test_next_day_start(self):
        """Test the next day start is always on the following calendar day."""
        assert HOURS.next_day_start(at(8)) == at(9, day_offset=1)
        assert HOURS.next_day_start(at(23, 59)) == at(9, day_offset=1)

    def test_is_working_time(self):
        assert HOURS.is_working_time(at(9))
        assert HOURS.is_working_time(at(12, 59))
        assert not HOURS.is_working_time(at(13))
        assert HOURS.is_working_time(at(14))
        assert not HOURS.is_working_time(at(18))


class TestWorkingMinutesLeft:
    """Test the remaining working minutes of a day."""

    def test_morning_includes_afternoon(self):
        """Test a morning instant counts the rest of the morning and the afternoon."""
        assert HOURS.working_minutes_left(at(9)) == 480
        assert HOURS.working_minutes_left(at(12, 30)) == 270

    def test_afternoon(self):
        assert HOURS.working_minutes_left(at(14)) == 240
        assert HOURS.working_minutes_left(at(17, 30)) == 30

    def test_lunch_counts_afternoon_only(self):
        assert HOURS.working_minutes_left(at(13, 30)) == 240

    def test_after_day_end(self):
        assert HOURS.working_minutes_left(at(18)) == 0
        assert HOURS.working_minutes_left(at(20)) == 0

    def test_before_day_start_counts_whole_day(self):
        assert HOURS.working_minutes_left(at(6)) == 480

    def test_fits_before_next_break(self):
        """Test the short-item fit check."""
        assert fits_before_next_break(at(9), 240, HOURS)
        assert fits_before_next_break(at(12), 240, HOURS)  # 60 + 180
        assert not fits_before_next_break(at(15), 240, HOURS)
        assert fits_before_next_break(at(15), 180, HOURS)
        assert not fits_before_next_break(at(17, 30), 31, HOURS)


class TestAdvance:
    """Test advancing instants by working minutes."""

    def test_within_morning(self):
        assert advance(at(9), 60, HOURS) == at(10)

    def test_crosses_lunch(self):
        """Test entering the lunch hour skips exactly one hour."""
        assert advance(at(12), 120, HOURS) == at(15)

    def test_ends_exactly_at_lunch_start(self):
        """Test a duration ending on lunch start returns lunch start."""
        assert advance(at(12), 60, HOURS) == at(13)

    def test_ends_exactly_at_day_end(self):
        """Test a duration ending on day end returns day end."""
        assert advance(at(17), 60, HOURS) == at(18)

    def test_rolls_over_to_next_day(self):
        assert advance(at(17), 120, HOURS) == at(10, day_offset=1)

    def test_before_day_start(self):
        assert advance(at(7), 30, HOURS) == at(9, 30)

    def test_start_inside_lunch(self):
        assert advance(at(13, 30), 30, HOURS) == at(14, 30)

    def test_start_after_day_end(self):
        assert advance(at(19), 60, HOURS) == at(10, day_offset=1)

    def test_multi_day(self):
        """Test a duration longer than a working day spans days."""
        assert advance(at(9), 480 + 60, HOURS) == at(10, day_offset=1)
        assert advance(at(17), 300, HOURS) == at(13, day_offset=1)

    @pytest.mark.parametrize("minutes", [0, -15])
    def test_non_positive_minutes_return_start(self, minutes):
        assert advance(at(19), minutes, HOURS) == at(19)

    def test_fractional_minutes(self):
        assert advance(at(9), 0.5, HOURS) == at(9) + timedelta(seconds=30)

    def test_custom_hours(self):
        """Test the calendar follows a non-default layout."""
        hours = WorkingHours(day_start=8, day_end=17, lunch_start=12)

        assert advance(datetime(2025, 11, 20, 11), 120, hours) == datetime(
            2025, 11, 20, 14
        )


starts = st.datetimes(
    min_value=datetime(2025, 1, 1), max_value=datetime(2025, 12, 31)
).map(lambda value: value.replace(second=0, microsecond=0))
durations = st.integers(min_value=1, max_value=3000)


class TestAdvanceProperties:
    """Property-based tests for calendar arithmetic."""

    @given(start=starts, minutes=durations)
    @settings(max_examples=200)
    def test_never_moves_backwards(self, start, minutes):
        assert advance(start, minutes, HOURS) >= start

    @given(start=starts, minutes=durations)
    @settings(max_examples=200)
    def test_result_is_inside_working_day(self, start, minutes):
        """Test the end is within the day and never inside the lunch hour."""
        end = advance(start, minutes, HOURS)
        day = end.date()

        assert HOURS.day_start_on(day) < end <= HOURS.day_end_on(day)
        assert not (HOURS.lunch_start_on(day) < end < HOURS.lunch_end_on(day))

    @given(start=starts, first=durations, second=durations)
    @settings(max_examples=200)
    def test_advance_is_additive(self, start, first, second):
        """Test splitting a duration in two gives the same end."""
        assert advance(advance(start, first, HOURS), second, HOURS) == advance(
            start, first + second, HOURS
        )

    @given(start=starts, minutes=st.integers(min_value=1, max_value=480))
    @settings(max_examples=200)
    def test_short_fit_finishes_same_day(self, start, minutes):
        """Test an item that fits its day finishes on that day."""
        start = HOURS.next_working_instant(start)
        if HOURS.fits_before_next_break(start, minutes):
            assert advance(start, minutes, HOURS).date() == start.date()
