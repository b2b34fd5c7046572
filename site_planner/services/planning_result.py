"""Result of a planning run and the write-back payload derived from it."""

from collections.abc import Iterator
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..domain.planning.entities.scheduled_item import ScheduledItem, ShortfallWarning
from ..domain.planning.value_objects.enums import ItemKind
from ..domain.planning.value_objects.working_hours import WorkingHours
from ..domain.shared.parsing import format_host_datetime


class UpdateField(str, Enum):
    """Fields the host stores for a scheduled item."""

    DURATION = "duration"
    START = "start"
    WORKERS = "workers"


class FieldUpdate(BaseModel):
    """One value to write back to the host for one item."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    kind: ItemKind
    field: UpdateField
    value: str


def _format_minutes(minutes: float) -> str:
    return str(int(minutes)) if float(minutes).is_integer() else f"{minutes:g}"


class PlanningResult(BaseModel):
    """Complete planning result."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    project_id: str = ""
    project_start: date
    run_start: datetime
    working_hours: WorkingHours
    items: list[ScheduledItem] = Field(default_factory=list)
    correlation_id: str = ""
    duration_seconds: float = 0.0

    @property
    def warnings(self) -> list[ShortfallWarning]:
        return [item.shortfall for item in self.items if item.shortfall is not None]

    @property
    def finish(self) -> datetime | None:
        return max((item.end for item in self.items), default=None)

    @property
    def rescheduled_count(self) -> int:
        return sum(1 for item in self.items if item.rescheduled)

    def field_updates(self) -> Iterator[FieldUpdate]:
        """
        Values to write back to the host, item by item.

        Computed durations (template or default) are written, stored ones are
        not. Every start is written. Assigned workers are written as a
        comma-joined list of worker ids when there are any.
        """
        for item in self.items:
            if item.duration_source.needs_write_back:
                yield FieldUpdate(
                    item_id=item.item_id,
                    kind=item.kind,
                    field=UpdateField.DURATION,
                    value=_format_minutes(item.duration_minutes),
                )
            yield FieldUpdate(
                item_id=item.item_id,
                kind=item.kind,
                field=UpdateField.START,
                value=format_host_datetime(item.start),
            )
            if item.assigned_workers:
                yield FieldUpdate(
                    item_id=item.item_id,
                    kind=item.kind,
                    field=UpdateField.WORKERS,
                    value=",".join(item.worker_ids),
                )

    def as_rows(self) -> list[dict[str, Any]]:
        """Display rows, one per scheduled item."""
        rows = []
        for item in self.items:
            rows.append(
                {
                    "id": item.item_id,
                    "kind": item.kind.value,
                    "task": item.task_name,
                    "name": item.name,
                    "zone": item.zone_id,
                    "quantity": item.quantity,
                    "duration": item.duration_minutes,
                    "duration_source": item.duration_source.value,
                    "start": format_host_datetime(item.start),
                    "end": format_host_datetime(item.end),
                    "dependency": item.dependency,
                    "parameters": item.parameters,
                    "workers_required": item.workers_required,
                    "workers": ", ".join(
                        worker.name or worker.worker_id
                        for worker in item.assigned_workers
                    ),
                    "warning": item.shortfall.message if item.shortfall else "",
                    "rescheduled": item.rescheduled,
                }
            )
        return rows
