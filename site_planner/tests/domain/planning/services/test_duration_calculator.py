"""Unit tests for duration resolution."""

import pytest

from site_planner.domain.planning.services.duration_calculator import (
    parse_duration,
    parse_quantity,
    resolve_duration,
)
from site_planner.domain.planning.services.template_index import TemplateIndex
from site_planner.domain.planning.value_objects.enums import DurationSource

from ..fixtures import ACTIVE, WorkItemFactory as F


@pytest.fixture
def index() -> TemplateIndex:
    return TemplateIndex.build(
        [F.template_operation("Glazing", "10"), F.template_task("Survey", "90")],
        ACTIVE,
    )


class TestResolveDuration:
    def test_existing_duration_wins(self, index):
        """Test a stored duration is never overridden by the template."""
        item = F.operation("Glazing", duration="45", quantity="3")

        resolution = resolve_duration(item, index)

        assert resolution.minutes == 45
        assert resolution.source is DurationSource.EXISTING

    def test_template_times_quantity(self, index):
        item = F.operation("Glazing", quantity="3")

        resolution = resolve_duration(item, index)

        assert resolution.minutes == 30
        assert resolution.source is DurationSource.TEMPLATE

    def test_template_for_tasks(self, index):
        resolution = resolve_duration(F.task("Survey"), index)

        assert resolution.minutes == 90
        assert resolution.source is DurationSource.TEMPLATE

    def test_default(self, index):
        resolution = resolve_duration(F.operation("Painting"), index)

        assert resolution.minutes == 60
        assert resolution.source is DurationSource.DEFAULT

    def test_configured_default(self, index):
        assert resolve_duration(F.operation("Painting"), index, 30).minutes == 30

    def test_zero_existing_falls_through(self, index):
        item = F.operation("Glazing", duration="0", quantity="2")

        assert resolve_duration(item, index).source is DurationSource.TEMPLATE


class TestParsers:
    @pytest.mark.parametrize(
        "raw,expected",
        [("3", 3), ("2,5", 2.5), ("", 1), (None, 1), ("0", 1), ("-2", 1), ("шт", 1)],
    )
    def test_parse_quantity(self, raw, expected):
        assert parse_quantity(raw) == expected

    @pytest.mark.parametrize(
        "raw,expected",
        [("120", 120), ("90.5", 90.5), ("120 мин", 120), ("", None), ("0", None)],
    )
    def test_parse_duration(self, raw, expected):
        assert parse_duration(raw) == expected
