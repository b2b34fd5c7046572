"""
Availability Ledger

Run-local record of the time each worker has been committed to during the
current planning run. A worker is available for an interval when it overlaps
neither their busy time nor anything already committed in the ledger.
"""

from collections import defaultdict

from ..entities.worker import Worker
from ..value_objects.time_interval import TimeInterval


class AvailabilityLedger:
    def __init__(self) -> None:
        self._commitments: dict[str, list[TimeInterval]] = defaultdict(list)

    def commit(self, worker_id: str, interval: TimeInterval) -> None:
        commitments = self._commitments[worker_id]
        commitments.append(interval)
        commitments.sort(key=lambda committed: committed.start)

    def release(self, worker_id: str, interval: TimeInterval) -> bool:
        """Remove one commitment; returns False if it was not recorded."""
        commitments = self._commitments.get(worker_id, [])
        if interval not in commitments:
            return False
        commitments.remove(interval)
        return True

    def commitments(self, worker_id: str) -> list[TimeInterval]:
        return list(self._commitments.get(worker_id, []))

    def is_free(self, worker_id: str, interval: TimeInterval) -> bool:
        return not any(
            interval.overlaps(committed)
            for committed in self._commitments.get(worker_id, [])
        )

    def is_available(self, worker: Worker, interval: TimeInterval) -> bool:
        """Checks both the worker's busy time and this run's commitments."""
        if any(interval.overlaps(slot.interval) for slot in worker.busy_slots):
            return False
        return self.is_free(worker.worker_id, interval)

    def __len__(self) -> int:
        return sum(len(commitments) for commitments in self._commitments.values())
