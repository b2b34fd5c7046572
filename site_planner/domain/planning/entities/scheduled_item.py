"""Scheduled item entity and the records attached to it during assignment."""

from datetime import datetime

from pydantic import Field

from ...shared.base import Entity, ValueObject
from ..value_objects.constraint import ConstraintPredicate, parse_parameters
from ..value_objects.coordinates import GeoPoint
from ..value_objects.enums import DurationSource, ItemKind
from ..value_objects.time_interval import TimeInterval


class AssignedWorker(ValueObject):
    """A worker committed to a scheduled item."""

    worker_id: str
    name: str = ""
    distance_km: float = Field(default=float("inf"), ge=0)


class ShortfallWarning(ValueObject):
    """Raised as data when an item could not get all the workers it needs."""

    item_id: str
    item_name: str
    required: int = Field(ge=0)
    assigned: int = Field(ge=0)
    eligible: int = Field(default=0, ge=0)
    available: int = Field(default=0, ge=0)

    @property
    def missing(self) -> int:
        return max(self.required - self.assigned, 0)

    @property
    def message(self) -> str:
        return (
            f"'{self.item_name}' needs {self.required} worker(s), "
            f"assigned {self.assigned} "
            f"({self.eligible} qualified, {self.available} available)"
        )


class ScheduledItem(Entity):
    """
    A work item placed on the timeline.

    Created by the scheduler; the worker assigner (and the rescheduler) fill
    in the assigned workers and the shortfall warning.
    """

    item_id: str
    project_id: str = ""
    kind: ItemKind
    name: str = Field(min_length=1)
    task_name: str = ""
    quantity: float = Field(default=1.0, gt=0)

    duration_minutes: float = Field(gt=0)
    duration_source: DurationSource
    start: datetime
    end: datetime

    parameters: str = ""
    workers_required: int = Field(default=1, ge=0)

    zone_id: str = ""
    zone_coordinates: str = ""
    dependency: str = ""

    assigned_workers: list[AssignedWorker] = Field(default_factory=list)
    shortfall: ShortfallWarning | None = None
    rescheduled: bool = False

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(self.start, self.end)

    @property
    def predicates(self) -> list[ConstraintPredicate]:
        return parse_parameters(self.parameters)

    @property
    def location(self) -> GeoPoint | None:
        return GeoPoint.parse(self.zone_coordinates)

    @property
    def is_zoned(self) -> bool:
        return bool(self.zone_id)

    @property
    def worker_ids(self) -> list[str]:
        return [worker.worker_id for worker in self.assigned_workers]

    @property
    def is_fully_staffed(self) -> bool:
        return len(self.assigned_workers) >= self.workers_required

    def move_to(self, start: datetime, end: datetime) -> None:
        """Move the item on the timeline and mark it as rescheduled."""
        if end < start:
            raise ValueError("End time must not be before start time")
        self.start = start
        self.end = end
        self.rescheduled = True
