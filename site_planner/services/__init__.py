"""Application services of the planning engine."""

from .planning_result import FieldUpdate, PlanningResult, UpdateField
from .planning_service import PlanningService, resolve_project_start

__all__ = [
    "FieldUpdate",
    "PlanningResult",
    "PlanningService",
    "UpdateField",
    "resolve_project_start",
]
