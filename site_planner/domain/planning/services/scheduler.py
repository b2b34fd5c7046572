"""
Scheduler

Places active work items on the timeline in a single forward pass over the
input order. Items inside a zone run in parallel with other zones; items
without a zone run one after another on a global cursor. Dependencies are
looked up by name in the item's zone first and globally second, so a
predecessor finished in the same zone always takes precedence.
"""

from collections.abc import Iterable
from datetime import datetime

from ....core.config import Settings
from ....core.config import settings as default_settings
from ....core.observability import get_logger
from ..entities.scheduled_item import ScheduledItem
from ..entities.work_item import WorkItem
from ..value_objects.working_hours import WorkingHours
from .context import PlanningContext
from .duration_calculator import parse_quantity, resolve_duration
from .requirement_resolver import resolve_requirement

logger = get_logger(__name__)


class Scheduler:
    """Forward scheduler over the flat list of work items."""

    def __init__(
        self, hours: WorkingHours | None = None, settings: Settings | None = None
    ) -> None:
        """
        Initialize the scheduler.

        Args:
            hours: Working hours of the site (defaults to the configured hours)
            settings: Engine settings (defaults to the module settings)
        """
        self._settings = settings or default_settings
        self._hours = hours or self._settings.working_hours

    @property
    def hours(self) -> WorkingHours:
        return self._hours

    def place(self, earliest: datetime, minutes: float) -> tuple[datetime, datetime]:
        """
        Find the start and end of an item that may start at earliest.

        The start is moved out of non-working time. A short item that would
        not finish on its start day is pushed to the next day start; longer
        items span days.
        """
        start = self._hours.next_working_instant(earliest)
        if minutes <= self._settings.SHORT_ITEM_MAX_MINUTES and not (
            self._hours.fits_before_next_break(start, minutes)
        ):
            start = self._hours.next_day_start(start)
        return start, self._hours.advance(start, minutes)

    def earliest_start(self, item: WorkItem, context: PlanningContext) -> datetime:
        floor = context.dependency_floor(item.kind, item.dependency, item.zone)
        if item.is_zoned:
            return floor if floor is not None else context.run_start
        if floor is not None and floor > context.cursor:
            return floor
        return context.cursor

    def schedule(
        self, items: Iterable[WorkItem], context: PlanningContext
    ) -> list[ScheduledItem]:
        """
        Schedule every active item in input order.

        Args:
            items: Flat list of work items (template rows are ignored)
            context: Run state; its completion maps and cursor are updated

        Returns:
            Scheduled items in input order
        """
        scheduled: list[ScheduledItem] = []
        active_status = self._settings.ACTIVE_STATUS

        for item in items:
            if not item.is_active(active_status):
                continue
            if not item.name:
                logger.debug("Skipping unnamed work item", item_id=item.item_id)
                continue

            duration = resolve_duration(
                item, context.index, self._settings.DEFAULT_DURATION_MINUTES
            )
            start, end = self.place(
                self.earliest_start(item, context), duration.minutes
            )

            context.record_completion(item.kind, item.name, end, item.zone)
            if not item.is_zoned:
                context.cursor = end

            requirement = resolve_requirement(
                item, context.index, self._settings.DEFAULT_WORKERS_REQUIRED
            )
            scheduled.append(
                ScheduledItem(
                    item_id=item.item_id,
                    project_id=item.project_id,
                    kind=item.kind,
                    name=item.name,
                    task_name=item.task_name.strip(),
                    quantity=parse_quantity(item.quantity),
                    duration_minutes=duration.minutes,
                    duration_source=duration.source,
                    start=start,
                    end=end,
                    parameters=requirement.parameters,
                    workers_required=requirement.workers_required,
                    zone_id=item.zone,
                    zone_coordinates=item.zone_coordinates.strip(),
                    dependency=item.dependency,
                )
            )

        finish = max((s.end for s in scheduled), default=None)
        logger.info(
            "Schedule computed",
            items=len(scheduled),
            zones=len(context.zone_completions),
            finish=finish.isoformat() if finish else None,
        )
        return scheduled
