"""
Observability Infrastructure

Structured logging and run metrics for the planning engine. Every planning
run gets a correlation id so that the log lines of one run can be grouped.
"""

import contextlib
import contextvars
import functools
import logging
import sys
import time
import uuid
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

import structlog
from prometheus_client import Counter, Histogram

from .config import settings

# Ids of the run in progress, attached to every log line
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)
project_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "project_id", default=""
)

F = TypeVar("F", bound=Callable[..., Any])

# Prometheus metrics
PLANNING_RUNS = Counter(
    "site_planner_planning_runs_total",
    "Total planning runs",
    ["status"],
)

PLANNING_DURATION = Histogram(
    "site_planner_planning_duration_seconds",
    "Planning operation duration",
    ["operation_type"],
)

PLANNING_OPERATIONS = Counter(
    "site_planner_operations_total",
    "Total planning engine operations",
    ["operation_type", "status"],
)

SCHEDULED_ITEMS = Counter(
    "site_planner_scheduled_items_total",
    "Work items placed on the timeline",
    ["kind", "duration_source"],
)

ASSIGNMENT_SHORTFALLS = Counter(
    "site_planner_assignment_shortfalls_total",
    "Scheduled items left with fewer workers than required",
    ["kind"],
)

RESCHEDULED_ITEMS = Counter(
    "site_planner_rescheduled_items_total",
    "Items moved to a later start to cover a worker shortfall",
)


class RunContextProcessor:
    """Structlog processor adding the run's correlation and project ids."""

    def __call__(
        self, logger: Any, name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, var in (
            ("correlation_id", correlation_id_var),
            ("project_id", project_id_var),
        ):
            value = var.get()
            if value:
                event_dict.setdefault(key, value)
        return event_dict


def setup_structured_logging(
    log_level: str | None = None, log_format: str | None = None
) -> None:
    """
    Configure structlog for the process.

    Output goes through the standard logging module to stderr so that
    command-line output on stdout stays machine-readable.
    """
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)

    if (log_format or settings.LOG_FORMAT) == "json":
        renderer: Any = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "local")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            RunContextProcessor(),
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.add_log_level,
            structlog.stdlib.add_logger_name,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def get_correlation_id() -> str:
    return correlation_id_var.get()


@contextlib.contextmanager
def planning_run_context(
    project_id: str = "", correlation_id: str | None = None
) -> Iterator[str]:
    """Bind a correlation id (and project id) for the duration of a run."""
    correlation_token = correlation_id_var.set(correlation_id or str(uuid.uuid4()))
    project_token = project_id_var.set(project_id)
    try:
        yield correlation_id_var.get()
    finally:
        project_id_var.reset(project_token)
        correlation_id_var.reset(correlation_token)


def log_error_with_context(
    error: Exception,
    operation: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Log a failed operation with the error's details and extra context."""
    fields: dict[str, Any] = {
        "operation": operation,
        "error_type": type(error).__name__,
        "error_message": str(error),
    }
    details = getattr(error, "details", None)
    if details:
        fields["error_details"] = details
    fields.update(context or {})

    get_logger("site_planner.errors").error("Planning operation failed", **fields)


def monitor_performance(operation_type: str):
    """Decorator recording duration and outcome of a planning operation."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__).bind(
                operation=operation_type, function=func.__name__
            )
            started = time.perf_counter()
            status = "error"
            try:
                result = func(*args, **kwargs)
                status = "success"
                return result
            except Exception as e:
                logger.error(
                    "Operation raised",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise
            finally:
                elapsed = time.perf_counter() - started
                PLANNING_OPERATIONS.labels(
                    operation_type=operation_type, status=status
                ).inc()
                PLANNING_DURATION.labels(operation_type=operation_type).observe(
                    elapsed
                )
                logger.debug("Operation finished", status=status, seconds=elapsed)

        return wrapper  # type: ignore[return-value]

    return decorator
