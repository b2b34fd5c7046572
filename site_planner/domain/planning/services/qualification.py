"""
Qualification Matching

Decides whether a worker satisfies the constraint predicates of an item.
Parameter ids map to worker fields through a closed lookup table; a few ids
describe the item rather than the worker and are not checked at all.
"""

from collections.abc import Callable, Iterable

from ...shared.parsing import is_blank, parse_number
from ..entities.worker import Worker
from ..value_objects.constraint import ConstraintPredicate

PARAMETER_FIELDS: dict[str, Callable[[Worker], str]] = {
    "2673": lambda worker: worker.qualification_level,
    "115": lambda worker: worker.role,
    "728": lambda worker: worker.qualification,
}

EXEMPT_PARAMETERS = frozenset({"740", "1015"})


def worker_value(worker: Worker, param_id: str) -> str | None:
    """Value of the worker field a parameter id refers to, or None if unmapped."""
    getter = PARAMETER_FIELDS.get(param_id)
    if getter is None:
        return None
    return getter(worker)


def _strict_number(text: str) -> float | None:
    try:
        return float(text.strip().replace(",", "."))
    except ValueError:
        return None


def values_match(expected: str, actual: str) -> bool:
    """String equality, or numeric equality when both sides are numbers."""
    if expected.strip() == actual.strip():
        return True
    expected_number = _strict_number(expected)
    actual_number = _strict_number(actual)
    return (
        expected_number is not None
        and actual_number is not None
        and expected_number == actual_number
    )


def satisfies(worker: Worker, predicate: ConstraintPredicate) -> bool:
    if predicate.param_id in EXEMPT_PARAMETERS or not predicate.constrains:
        return True

    value = worker_value(worker, predicate.param_id)
    if is_blank(value):
        return False

    if predicate.required:
        return True

    if predicate.exact_value is not None and not values_match(
        predicate.exact_value, value
    ):
        return False

    if predicate.has_range:
        number = parse_number(value)
        if number is None:
            return False
        if predicate.min_value is not None and number < predicate.min_value:
            return False
        if predicate.max_value is not None and number > predicate.max_value:
            return False

    return True


def is_qualified(worker: Worker, predicates: Iterable[ConstraintPredicate]) -> bool:
    """True when the worker satisfies every predicate."""
    return all(satisfies(worker, predicate) for predicate in predicates)
