import pytest

from site_planner.core.config import Settings
from site_planner.domain.planning.services.context import PlanningContext
from site_planner.domain.planning.value_objects.working_hours import WorkingHours
from site_planner.tests.domain.planning.fixtures import at


@pytest.fixture
def planner_settings() -> Settings:
    """Settings with defaults only, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def hours() -> WorkingHours:
    return WorkingHours(day_start=9, day_end=18, lunch_start=13)


@pytest.fixture
def context() -> PlanningContext:
    """Empty run context starting at 09:00 on the reference day."""
    return PlanningContext(run_start=at(9))
