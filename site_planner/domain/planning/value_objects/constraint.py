"""
Constraint Value Objects

Work items describe the workers they need in a compact parameter language:
comma-separated ``ID:CONDITION`` pairs where CONDITION is one of

    VALUE(-)      exact value, e.g. ``115:849(-)``
    (MIN-MAX)     numeric range, either bound optional, e.g. ``2673:(4-)``
    %(-)          the worker field must be filled, e.g. ``740:%(-)``

Pairs without a colon or with an empty id are skipped.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from ....core.observability import get_logger
from ...shared.parsing import is_blank, parse_number

logger = get_logger(__name__)

REQUIRED_MARKER = "%"
_RANGE = re.compile(r"\(([^)]+)\)")


@dataclass(frozen=True)
class ConstraintPredicate:
    """One parsed ``ID:CONDITION`` pair."""

    param_id: str
    raw_value: str
    exact_value: str | None = None
    min_value: float | None = None
    max_value: float | None = None
    required: bool = False

    @property
    def has_range(self) -> bool:
        return self.min_value is not None or self.max_value is not None

    @property
    def constrains(self) -> bool:
        """False for pairs like ``115:(-)`` that accept any worker."""
        return self.required or self.has_range or self.exact_value is not None

    def __str__(self) -> str:
        return f"{self.param_id}:{self.raw_value}"

    @classmethod
    def parse(cls, pair: str) -> ConstraintPredicate | None:
        """Parse a single pair, or return None when it is malformed."""
        param_id, sep, raw_value = pair.strip().partition(":")
        param_id = param_id.strip()
        if not sep or not param_id:
            return None

        if REQUIRED_MARKER in raw_value:
            return cls(param_id=param_id, raw_value=raw_value, required=True)

        min_value = max_value = None
        match = _RANGE.search(raw_value)
        if match:
            bounds = match.group(1).split("-")
            if len(bounds) == 2:
                min_value = _parse_bound(bounds[0])
                max_value = _parse_bound(bounds[1])

        exact_value = raw_value.split("(")[0].strip() or None
        return cls(
            param_id=param_id,
            raw_value=raw_value,
            exact_value=exact_value,
            min_value=min_value,
            max_value=max_value,
        )


def _parse_bound(text: str) -> float | None:
    text = text.strip()
    if not text:
        return None
    return parse_number(text)


def _pairs(text: str | None) -> list[str]:
    if is_blank(text):
        return []
    return [pair.strip() for pair in str(text).split(",") if pair.strip()]


def parse_parameters(text: str | None) -> list[ConstraintPredicate]:
    """Parse a constraint string into predicates, skipping malformed pairs."""
    predicates = []
    for pair in _pairs(text):
        predicate = ConstraintPredicate.parse(pair)
        if predicate is None:
            logger.debug("Skipping malformed constraint pair", pair=pair)
            continue
        predicates.append(predicate)
    return predicates


def format_parameters(predicates: Iterable[ConstraintPredicate]) -> str:
    return ",".join(str(predicate) for predicate in predicates)


def merge_parameters(task_text: str | None, operation_text: str | None) -> str:
    """
    Merge task-level and operation-level constraint strings.

    Operation pairs override task pairs with the same id. Surviving task pairs
    come first, followed by every operation pair. When either side is empty
    the other one is returned verbatim.

    >>> merge_parameters("115:849(-),2673:(4-)", "115:850(-)")
    '2673:(4-),115:850(-)'
    """
    if is_blank(task_text):
        return "" if is_blank(operation_text) else str(operation_text)
    if is_blank(operation_text):
        return str(task_text)

    task_predicates = parse_parameters(task_text)
    operation_predicates = parse_parameters(operation_text)
    overridden = {predicate.param_id for predicate in operation_predicates}

    merged = [p for p in task_predicates if p.param_id not in overridden]
    merged.extend(operation_predicates)
    return format_parameters(merged)
