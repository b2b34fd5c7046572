"""
Domain Services

The planning engine: template lookup, duration and requirement resolution,
the forward scheduler, worker assignment and shortfall rescheduling. All run
state is carried by an explicit PlanningContext.
"""

from .availability_ledger import AvailabilityLedger
from .context import PlanningContext
from .duration_calculator import DurationResolution, resolve_duration
from .requirement_resolver import WorkforceRequirement, resolve_requirement
from .rescheduler import ShortfallRescheduler
from .scheduler import Scheduler
from .template_index import TemplateIndex
from .worker_assigner import WorkerAssigner

__all__ = [
    "AvailabilityLedger",
    "PlanningContext",
    "DurationResolution",
    "resolve_duration",
    "WorkforceRequirement",
    "resolve_requirement",
    "Scheduler",
    "ShortfallRescheduler",
    "TemplateIndex",
    "WorkerAssigner",
]
