"""
Requirement Resolver

Resolves what an item needs from the workforce: how many workers and which
constraint string they must satisfy. Template data wins over the values stored
on the item itself; for operations the task-side constraints are merged with
the operation-side ones.
"""

from dataclasses import dataclass

from ...shared.parsing import is_blank, parse_positive_int
from ..entities.work_item import WorkItem
from ..value_objects.constraint import merge_parameters
from ..value_objects.enums import ItemKind
from .template_index import TemplateIndex


@dataclass(frozen=True)
class WorkforceRequirement:
    workers_required: int
    parameters: str


def _first_filled(*values: str | None) -> str:
    for value in values:
        if not is_blank(value):
            return str(value).strip()
    return ""


def resolve_parameters(item: WorkItem, index: TemplateIndex) -> str:
    """Constraint string of an item (template first, then the item's own)."""
    task_side = _first_filled(
        index.parameters(ItemKind.TASK, item.task_name), item.task_parameters
    )
    if item.kind is ItemKind.TASK:
        return task_side

    operation_side = _first_filled(
        index.parameters(ItemKind.OPERATION, item.operation_name),
        item.operation_parameters,
    )
    return merge_parameters(task_side, operation_side)


def resolve_worker_count(item: WorkItem, index: TemplateIndex, default: int = 1) -> int:
    """Required worker count: template hint, then the item's own hint, then default."""
    hint = index.worker_hint(item.kind, item.name)
    if hint is not None:
        return hint
    own = parse_positive_int(item.own_worker_hint)
    if own is not None:
        return own
    return default


def resolve_requirement(
    item: WorkItem, index: TemplateIndex, default_workers: int = 1
) -> WorkforceRequirement:
    return WorkforceRequirement(
        workers_required=resolve_worker_count(item, index, default_workers),
        parameters=resolve_parameters(item, index),
    )
