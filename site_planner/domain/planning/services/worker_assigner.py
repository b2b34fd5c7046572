"""
Worker Assigner

Assigns workers to scheduled items in schedule order. For each item the
workers are filtered by qualification and availability, ranked by distance
to the item's zone, and the nearest ones are committed to the run's ledger
so that later items cannot double-book them.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from ....core.config import Settings
from ....core.config import settings as default_settings
from ....core.observability import ASSIGNMENT_SHORTFALLS, get_logger
from ..entities.scheduled_item import AssignedWorker, ScheduledItem, ShortfallWarning
from ..entities.worker import Worker
from ..value_objects.coordinates import distance_between
from ..value_objects.time_interval import TimeInterval
from .availability_ledger import AvailabilityLedger
from .qualification import is_qualified

logger = get_logger(__name__)


@dataclass(frozen=True)
class Candidate:
    worker: Worker
    distance_km: float

    def as_assignment(self) -> AssignedWorker:
        return AssignedWorker(
            worker_id=self.worker.worker_id,
            name=self.worker.display_name,
            distance_km=self.distance_km,
        )


@dataclass(frozen=True)
class CandidatePool:
    """Workers considered for one item at one interval."""

    eligible: list[Worker]
    ranked: list[Candidate]

    def pick(self, count: int) -> list[Candidate]:
        return self.ranked[:count]


def find_candidates(
    item: ScheduledItem,
    workers: Sequence[Worker],
    ledger: AvailabilityLedger,
    interval: TimeInterval | None = None,
) -> CandidatePool:
    """
    Qualified workers of an item and the available ones ranked by distance.

    Workers without an id are never candidates.

    Args:
        item: Item being staffed
        workers: All workers, in input order
        ledger: Run-local commitments
        interval: Interval to check instead of the item's own

    Returns:
        Eligible workers and the available ones, nearest first (ties keep
        input order)
    """
    interval = interval or item.interval
    predicates = item.predicates
    location = item.location

    eligible = [
        worker
        for worker in workers
        if worker.is_identified and is_qualified(worker, predicates)
    ]
    available = [
        Candidate(worker, distance_between(location, worker.location))
        for worker in eligible
        if ledger.is_available(worker, interval)
    ]
    available.sort(key=lambda candidate: candidate.distance_km)
    return CandidatePool(eligible=eligible, ranked=available)


class WorkerAssigner:
    """Greedy, nearest-first worker assignment."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings

    def assign_item(
        self,
        item: ScheduledItem,
        workers: Sequence[Worker],
        ledger: AvailabilityLedger,
    ) -> ScheduledItem:
        """Staff a single item and commit the chosen workers to the ledger."""
        required = item.workers_required
        pool = find_candidates(item, workers, ledger)
        chosen = pool.pick(required)

        for candidate in chosen:
            ledger.commit(candidate.worker.worker_id, item.interval)
        item.assigned_workers = [candidate.as_assignment() for candidate in chosen]

        if len(chosen) < required:
            item.shortfall = ShortfallWarning(
                item_id=item.item_id,
                item_name=item.name,
                required=required,
                assigned=len(chosen),
                eligible=len(pool.eligible),
                available=len(pool.ranked),
            )
            ASSIGNMENT_SHORTFALLS.labels(kind=item.kind.value).inc()
            logger.warning(
                "Worker shortfall",
                item_id=item.item_id,
                item=item.name,
                required=required,
                assigned=len(chosen),
                eligible=len(pool.eligible),
                start=item.start.isoformat(),
            )
        else:
            item.shortfall = None

        return item

    def assign(
        self,
        scheduled: Sequence[ScheduledItem],
        workers: Sequence[Worker],
        ledger: AvailabilityLedger,
    ) -> list[ScheduledItem]:
        """
        Assign workers to every item in schedule order.

        Args:
            scheduled: Items produced by the scheduler
            workers: Available workforce
            ledger: Run-local commitments, updated in place

        Returns:
            The same items with assigned workers and shortfall warnings
        """
        staffed = [self.assign_item(item, workers, ledger) for item in scheduled]
        logger.info(
            "Workers assigned",
            items=len(staffed),
            workers=len(workers),
            commitments=len(ledger),
            shortfalls=sum(1 for item in staffed if item.shortfall is not None),
        )
        return staffed
