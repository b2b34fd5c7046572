"""
Test fixtures and factories for planning domain objects.

Provides builders for work items (template and active rows), workers and
scheduled items so that tests only spell out the fields they care about.
"""

from datetime import datetime, timedelta

from site_planner.domain.planning.entities.scheduled_item import ScheduledItem
from site_planner.domain.planning.entities.work_item import WorkItem
from site_planner.domain.planning.entities.worker import Worker
from site_planner.domain.planning.value_objects.enums import DurationSource, ItemKind

ACTIVE = "В работе"
PROJECT_START = "20.11.2025"
DAY = datetime(2025, 11, 20)

# Reference points around a site in Moscow
SITE = "55.7558,37.6173"
NEAR_SITE = "55.7738,37.6173"  # about 2 km north
FAR_FROM_SITE = "56.2058,37.6173"  # about 50 km north


def at(hour: int, minute: int = 0, day_offset: int = 0) -> datetime:
    """An instant on the reference day (or a following one)."""
    return DAY + timedelta(days=day_offset, hours=hour, minutes=minute)


class WorkItemFactory:
    """Factory for creating work item rows."""

    _next_id = 1000

    @classmethod
    def _id(cls) -> str:
        cls._next_id += 1
        return str(cls._next_id)

    @classmethod
    def task(
        cls,
        name: str,
        duration: str = "",
        normative: str = "",
        quantity: str = "",
        previous: str = "",
        zone: str = "",
        coordinates: str = "",
        parameters: str = "",
        workers: str = "",
        status: str = ACTIVE,
        start: str = PROJECT_START,
        task_id: str | None = None,
    ) -> WorkItem:
        """Create a task row (no operation id)."""
        return WorkItem(
            project_id="2614",
            project_start=start if status == ACTIVE else "",
            status=status,
            task_id=task_id or cls._id(),
            task_name=name,
            task_duration=duration,
            task_normative=normative,
            quantity=quantity,
            previous_task=previous,
            zone_id=zone,
            zone_coordinates=coordinates,
            task_parameters=parameters,
            task_workers=workers,
        )

    @classmethod
    def operation(
        cls,
        name: str,
        task_name: str = "Монтаж витражей",
        duration: str = "",
        normative: str = "",
        quantity: str = "",
        previous: str = "",
        zone: str = "",
        coordinates: str = "",
        parameters: str = "",
        task_parameters: str = "",
        workers: str = "",
        status: str = ACTIVE,
        start: str = PROJECT_START,
        operation_id: str | None = None,
    ) -> WorkItem:
        """Create an operation row belonging to a task."""
        return WorkItem(
            project_id="2614",
            project_start=start if status == ACTIVE else "",
            status=status,
            task_id="2615",
            task_name=task_name,
            task_parameters=task_parameters,
            operation_id=operation_id or cls._id(),
            operation_name=name,
            operation_duration=duration,
            operation_normative=normative,
            quantity=quantity,
            previous_operation=previous,
            zone_id=zone,
            zone_coordinates=coordinates,
            operation_parameters=parameters,
            operation_workers=workers,
        )

    @classmethod
    def template_operation(cls, name: str, normative: str, **kwargs) -> WorkItem:
        return cls.operation(name, normative=normative, status="", **kwargs)

    @classmethod
    def template_task(cls, name: str, normative: str, **kwargs) -> WorkItem:
        return cls.task(name, normative=normative, status="", **kwargs)


class WorkerFactory:
    """Factory for creating workers."""

    @staticmethod
    def create_worker(
        worker_id: str = "1",
        name: str = "",
        level: str = "5",
        role: str = "849",
        qualification: str = "Монтажник",
        busy_time: str = "",
        coordinates: str = SITE,
    ) -> Worker:
        return Worker(
            worker_id=worker_id,
            name=name or f"worker-{worker_id}",
            qualification_level=level,
            role=role,
            qualification=qualification,
            busy_time=busy_time,
            coordinates=coordinates,
        )


def scheduled_item(
    start: datetime,
    end: datetime,
    name: str = "Монтаж стеклопакетов",
    item_id: str = "1",
    workers_required: int = 1,
    parameters: str = "",
    zone_id: str = "Z1",
    zone_coordinates: str = SITE,
    kind: ItemKind = ItemKind.OPERATION,
) -> ScheduledItem:
    """Create a scheduled item directly, bypassing the scheduler."""
    return ScheduledItem(
        item_id=item_id,
        kind=kind,
        name=name,
        duration_minutes=(end - start).total_seconds() / 60 or 60,
        duration_source=DurationSource.EXISTING,
        start=start,
        end=end,
        parameters=parameters,
        workers_required=workers_required,
        zone_id=zone_id,
        zone_coordinates=zone_coordinates,
    )
