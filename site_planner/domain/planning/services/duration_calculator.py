"""
Duration Calculator

Resolves the effective duration of a work item in minutes. The priority
chain is fixed:

1. a positive duration already stored on the item,
2. the template normative for the item's kind and name times its quantity,
3. the configured default.
"""

from dataclasses import dataclass
from typing import Any

from ...shared.parsing import parse_number
from ..entities.work_item import WorkItem
from ..value_objects.enums import DurationSource
from .template_index import TemplateIndex

DEFAULT_DURATION_MINUTES = 60.0


@dataclass(frozen=True)
class DurationResolution:
    minutes: float
    source: DurationSource


def parse_quantity(raw: Any) -> float:
    """Quantity of an item; absent, zero or unparseable values count as 1."""
    quantity = parse_number(raw)
    if quantity is None or quantity <= 0:
        return 1.0
    return quantity


def parse_duration(raw: Any) -> float | None:
    """Positive duration in minutes, or None."""
    minutes = parse_number(raw)
    if minutes is None or minutes <= 0:
        return None
    return minutes


def resolve_duration(
    item: WorkItem,
    index: TemplateIndex,
    default_minutes: float = DEFAULT_DURATION_MINUTES,
) -> DurationResolution:
    """Resolve the duration of an item together with its provenance."""
    existing = item.existing_duration
    if existing is not None:
        return DurationResolution(existing, DurationSource.EXISTING)

    normative = index.normative(item.kind, item.name)
    if normative is not None:
        return DurationResolution(
            normative * parse_quantity(item.quantity), DurationSource.TEMPLATE
        )

    return DurationResolution(float(default_minutes), DurationSource.DEFAULT)
