"""
Planning Service

Orchestrates one planning run: checks the run preconditions, builds the
per-run context, schedules the active work items, assigns workers and
optionally reschedules understaffed items. Results are returned as data; the
service never writes to the host.
"""

import time
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from ..core.config import Settings
from ..core.config import settings as default_settings
from ..core.observability import (
    PLANNING_RUNS,
    SCHEDULED_ITEMS,
    get_logger,
    log_error_with_context,
    monitor_performance,
    planning_run_context,
)
from ..domain.planning.entities.work_item import WorkItem
from ..domain.planning.entities.worker import Worker
from ..domain.planning.services import (
    PlanningContext,
    Scheduler,
    ShortfallRescheduler,
    TemplateIndex,
    WorkerAssigner,
)
from ..domain.planning.value_objects.working_hours import WorkingHours
from ..domain.shared.exceptions import MissingRunInputError
from ..domain.shared.parsing import parse_host_date
from .planning_result import PlanningResult

logger = get_logger(__name__)

WorkItemInput = WorkItem | Mapping[str, Any]
WorkerInput = Worker | Mapping[str, Any]


def load_work_items(rows: Iterable[WorkItemInput]) -> list[WorkItem]:
    """Accept model instances or decoded host rows."""
    return [
        row if isinstance(row, WorkItem) else WorkItem.model_validate(row)
        for row in rows
    ]


def load_workers(rows: Iterable[WorkerInput]) -> list[Worker]:
    return [
        row if isinstance(row, Worker) else Worker.model_validate(row) for row in rows
    ]


def resolve_project_start(items: Iterable[WorkItem], active_status: str) -> date:
    """
    Start date of the project being planned.

    Returns:
        The first parseable dd.mm.yyyy start among active items

    Raises:
        MissingRunInputError: If no active item carries a usable start date
    """
    active = 0
    for item in items:
        if not item.is_active(active_status):
            continue
        active += 1
        start = parse_host_date(item.project_start)
        if start is not None:
            return start

    if active == 0:
        raise MissingRunInputError(
            f"No work items with status '{active_status}' to schedule",
            missing="active_items",
        )
    raise MissingRunInputError(
        "No active work item carries a project start date (dd.mm.yyyy)",
        missing="project_start",
    )


def _project_id(items: Iterable[WorkItem], active_status: str) -> str:
    for item in items:
        if item.is_active(active_status) and item.project_id:
            return item.project_id
    return ""


class PlanningService:
    """Application service running the planning engine end to end."""

    def __init__(
        self,
        settings: Settings | None = None,
        hours: WorkingHours | None = None,
    ) -> None:
        """
        Initialize the planning service.

        Args:
            settings: Engine settings (defaults to the module settings)
            hours: Working hours overriding the configured ones
        """
        self._settings = settings or default_settings
        self._hours = hours or self._settings.working_hours

    @property
    def hours(self) -> WorkingHours:
        return self._hours

    @monitor_performance("plan_project")
    def plan(
        self,
        items: Iterable[WorkItemInput],
        workers: Iterable[WorkerInput] = (),
        hours: WorkingHours | None = None,
        reschedule: bool | None = None,
        correlation_id: str | None = None,
    ) -> PlanningResult:
        """
        Produce a schedule with assigned workers.

        Args:
            items: Flat list of work items, template rows included
            workers: Workforce to assign from
            hours: Working hours for this run only
            reschedule: Reschedule understaffed zoned items (defaults to settings)
            correlation_id: Correlation id for the run's log lines

        Returns:
            Planning result with scheduled items and warnings

        Raises:
            MissingRunInputError: If there is nothing to schedule or no start date
        """
        work_items = load_work_items(items)
        workforce = load_workers(workers)
        hours = hours or self._hours
        active_status = self._settings.ACTIVE_STATUS
        if reschedule is None:
            reschedule = self._settings.RESCHEDULE_SHORTFALLS

        project_id = _project_id(work_items, active_status)
        with planning_run_context(project_id, correlation_id) as run_id:
            started = time.perf_counter()
            try:
                project_start = resolve_project_start(work_items, active_status)
            except MissingRunInputError as e:
                PLANNING_RUNS.labels(status="rejected").inc()
                log_error_with_context(
                    e, "plan_project", {"items": len(work_items)}
                )
                raise

            run_start = hours.day_start_on(project_start)
            context = PlanningContext(
                run_start=run_start,
                index=TemplateIndex.build(work_items, active_status),
            )
            logger.info(
                "Planning run started",
                items=len(work_items),
                workers=len(workforce),
                run_start=run_start.isoformat(),
                working_hours=str(hours),
                reschedule=reschedule,
            )

            scheduler = Scheduler(hours, self._settings)
            scheduled = scheduler.schedule(work_items, context)
            scheduled = WorkerAssigner(self._settings).assign(
                scheduled, workforce, context.ledger
            )
            if reschedule:
                scheduled = ShortfallRescheduler(scheduler, self._settings).reschedule(
                    scheduled, workforce, context.ledger
                )

            for item in scheduled:
                SCHEDULED_ITEMS.labels(
                    kind=item.kind.value, duration_source=item.duration_source.value
                ).inc()

            result = PlanningResult(
                project_id=project_id,
                project_start=project_start,
                run_start=run_start,
                working_hours=hours,
                items=scheduled,
                correlation_id=run_id,
                duration_seconds=time.perf_counter() - started,
            )
            status = "shortfall" if result.warnings else "success"
            PLANNING_RUNS.labels(status=status).inc()
            logger.info(
                "Planning run finished",
                status=status,
                scheduled=len(result.items),
                warnings=len(result.warnings),
                rescheduled=result.rescheduled_count,
                finish=result.finish.isoformat() if result.finish else None,
            )
            return result
