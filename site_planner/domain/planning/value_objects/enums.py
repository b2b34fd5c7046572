"""Domain enums for planning."""

from enum import Enum


class ItemKind(str, Enum):
    """Kind of a work item: a project task or one of its operations."""

    TASK = "task"
    OPERATION = "operation"

    @property
    def label(self) -> str:
        return "Задача" if self is ItemKind.TASK else "Операция"


class DurationSource(str, Enum):
    """Where the effective duration of a scheduled item came from."""

    EXISTING = "existing"  # Duration already stored on the item
    TEMPLATE = "template"  # Template normative x quantity
    DEFAULT = "default"  # Configured fallback

    @property
    def needs_write_back(self) -> bool:
        """Computed durations are written back to the host; stored ones are not."""
        return self is not DurationSource.EXISTING
