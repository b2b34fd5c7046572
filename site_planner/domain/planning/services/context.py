"""
Planning Context

All mutable state of one planning run: the template index, the completion
maps used to chain dependencies, the cursor for items without a zone and the
availability ledger. A context is created per run and discarded afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime

from ..value_objects.enums import ItemKind
from .availability_ledger import AvailabilityLedger
from .template_index import TemplateIndex

CompletionKey = tuple[ItemKind, str]


@dataclass
class PlanningContext:
    run_start: datetime
    index: TemplateIndex = field(default_factory=TemplateIndex)
    ledger: AvailabilityLedger = field(default_factory=AvailabilityLedger)
    global_completions: dict[CompletionKey, datetime] = field(default_factory=dict)
    zone_completions: dict[str, dict[CompletionKey, datetime]] = field(
        default_factory=dict
    )
    cursor: datetime | None = None

    def __post_init__(self):
        if self.cursor is None:
            self.cursor = self.run_start

    def dependency_floor(self, kind: ItemKind, name: str, zone: str = "") -> datetime | None:
        """
        Completion time of a predecessor.

        The item's own zone is looked up first so that parallel zones chain
        independently; the global map is the fallback.
        """
        if not name:
            return None
        key = (kind, name)
        if zone:
            zoned = self.zone_completions.get(zone, {})
            if key in zoned:
                return zoned[key]
        return self.global_completions.get(key)

    def record_completion(
        self, kind: ItemKind, name: str, end: datetime, zone: str = ""
    ) -> None:
        key = (kind, name)
        self.global_completions[key] = end
        if zone:
            self.zone_completions.setdefault(zone, {})[key] = end
