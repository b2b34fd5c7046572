"""
Shortfall Rescheduler

Second pass over the assignment result. A zoned item that did not get all the
workers it needs is moved to the earliest later start at which enough
qualified workers are free, looking at most a fixed number of days ahead.
Candidate starts are the instants at which one of the qualified workers
becomes free again. Dependents of a moved item are not re-flowed.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta

from ....core.config import Settings
from ....core.config import settings as default_settings
from ....core.observability import RESCHEDULED_ITEMS, get_logger
from ..entities.scheduled_item import ScheduledItem
from ..entities.worker import Worker
from ..value_objects.time_interval import TimeInterval
from .availability_ledger import AvailabilityLedger
from .scheduler import Scheduler
from .worker_assigner import find_candidates

logger = get_logger(__name__)


class ShortfallRescheduler:
    def __init__(
        self, scheduler: Scheduler | None = None, settings: Settings | None = None
    ) -> None:
        self._settings = settings or default_settings
        self._scheduler = scheduler or Scheduler(settings=self._settings)

    def candidate_starts(
        self,
        item: ScheduledItem,
        eligible: Sequence[Worker],
        ledger: AvailabilityLedger,
    ) -> list[datetime]:
        """The item's own start followed by every later release instant."""
        releases = set()
        for worker in eligible:
            for committed in ledger.commitments(worker.worker_id):
                if committed.end > item.start:
                    releases.add(committed.end)
            for slot in worker.busy_slots:
                if slot.interval.end > item.start:
                    releases.add(slot.interval.end)
        return [item.start, *sorted(releases)]

    def reschedule_item(
        self,
        item: ScheduledItem,
        workers: Sequence[Worker],
        ledger: AvailabilityLedger,
    ) -> bool:
        """
        Try to move one understaffed item.

        Returns:
            True if the item was moved and is now fully staffed
        """
        required = item.workers_required
        original_interval = item.interval
        pool = find_candidates(item, workers, ledger)
        if len(pool.eligible) < required:
            logger.debug(
                "Not enough qualified workers to reschedule",
                item_id=item.item_id,
                required=required,
                eligible=len(pool.eligible),
            )
            return False

        # Partial assignments are released while later starts are evaluated
        for assigned in item.assigned_workers:
            ledger.release(assigned.worker_id, original_interval)

        horizon = item.start + timedelta(days=self._settings.RESCHEDULE_HORIZON_DAYS)
        for candidate in self.candidate_starts(item, pool.eligible, ledger):
            start, end = self._scheduler.place(candidate, item.duration_minutes)
            if start > horizon:
                break
            interval = TimeInterval(start, end)
            chosen = find_candidates(item, workers, ledger, interval).pick(required)
            if len(chosen) < required:
                continue

            for picked in chosen:
                ledger.commit(picked.worker.worker_id, interval)
            item.move_to(start, end)
            item.assigned_workers = [picked.as_assignment() for picked in chosen]
            item.shortfall = None
            RESCHEDULED_ITEMS.inc()
            logger.info(
                "Item rescheduled to cover worker shortfall",
                item_id=item.item_id,
                item=item.name,
                previous_start=original_interval.start.isoformat(),
                start=start.isoformat(),
            )
            return True

        for assigned in item.assigned_workers:
            ledger.commit(assigned.worker_id, original_interval)
        logger.debug(
            "No later start found within horizon",
            item_id=item.item_id,
            horizon_days=self._settings.RESCHEDULE_HORIZON_DAYS,
        )
        return False

    def reschedule(
        self,
        scheduled: Sequence[ScheduledItem],
        workers: Sequence[Worker],
        ledger: AvailabilityLedger,
    ) -> list[ScheduledItem]:
        """Reschedule understaffed zoned items in schedule order."""
        moved = 0
        for item in scheduled:
            if item.shortfall is None or not item.is_zoned:
                continue
            if self.reschedule_item(item, workers, ledger):
                moved += 1

        logger.info("Shortfall rescheduling finished", moved=moved)
        return list(scheduled)
