from typing import Literal

from pydantic import computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self

from site_planner.domain.planning.value_objects.working_hours import WorkingHours


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SITE_PLANNER_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "site-planner"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Working hours (whole hours, 24-hour clock)
    WORK_DAY_START: int = 9
    WORK_DAY_END: int = 18
    LUNCH_START: int = 13

    @computed_field  # type: ignore[prop-decorator]
    @property
    def working_hours(self) -> WorkingHours:
        return WorkingHours(
            day_start=self.WORK_DAY_START,
            day_end=self.WORK_DAY_END,
            lunch_start=self.LUNCH_START,
        )

    # Status literal that marks rows to be scheduled; everything else is a template
    ACTIVE_STATUS: str = "В работе"

    # Durations in minutes
    DEFAULT_DURATION_MINUTES: float = 60
    # Items up to this length must not be split across days
    SHORT_ITEM_MAX_MINUTES: float = 240

    DEFAULT_WORKERS_REQUIRED: int = 1

    # Shortfall rescheduling
    RESCHEDULE_SHORTFALLS: bool = False
    RESCHEDULE_HORIZON_DAYS: int = 14

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["console", "json"] = "console"

    @model_validator(mode="after")
    def _check_working_hours(self) -> Self:
        # Raises InvalidWorkingHoursError for an inconsistent day layout
        self.working_hours
        return self

    @model_validator(mode="after")
    def _check_positive_values(self) -> Self:
        if self.DEFAULT_DURATION_MINUTES <= 0:
            raise ValueError("DEFAULT_DURATION_MINUTES must be positive")
        if self.DEFAULT_WORKERS_REQUIRED < 0:
            raise ValueError("DEFAULT_WORKERS_REQUIRED cannot be negative")
        if self.RESCHEDULE_HORIZON_DAYS < 1:
            raise ValueError("RESCHEDULE_HORIZON_DAYS must be at least 1")
        return self


settings = Settings()  # type: ignore
