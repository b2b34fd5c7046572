"""
Template Index

Template projects (every row whose status is not the active marker) describe
the norms of each task and operation by name. The index collects them once
per planning run so that active rows can look up their normative duration,
worker count and constraint string.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from ....core.observability import get_logger
from ...shared.parsing import is_blank, parse_number, parse_positive_int
from ..entities.work_item import WorkItem
from ..value_objects.enums import ItemKind

logger = get_logger(__name__)


@dataclass
class _KindTemplates:
    normatives: dict[str, float] = field(default_factory=dict)
    worker_hints: dict[str, int] = field(default_factory=dict)
    parameters: dict[str, str] = field(default_factory=dict)

    def collect(self, name: str, normative: str, workers: str, parameters: str):
        name = name.strip()
        if not name:
            return

        if name not in self.normatives:
            minutes = parse_number(normative)
            if minutes is not None and minutes > 0:
                self.normatives[name] = minutes

        if name not in self.worker_hints:
            count = parse_positive_int(workers)
            if count is not None:
                self.worker_hints[name] = count

        if name not in self.parameters and not is_blank(parameters):
            self.parameters[name] = parameters.strip()


class TemplateIndex:
    """
    Read-only lookup of template data by task or operation name.

    The first template row that carries a usable value for a name wins; later
    rows never overwrite it.
    """

    def __init__(self) -> None:
        self._templates = {kind: _KindTemplates() for kind in ItemKind}

    @classmethod
    def build(cls, items: Iterable[WorkItem], active_status: str) -> "TemplateIndex":
        """
        Scan all rows and index those that are not active.

        Args:
            items: The full flat list of work items, templates and active rows
            active_status: Status literal that marks rows to be scheduled

        Returns:
            Populated template index
        """
        index = cls()
        template_rows = 0
        for item in items:
            if item.is_active(active_status):
                continue
            template_rows += 1
            index._templates[ItemKind.TASK].collect(
                item.task_name,
                item.task_normative,
                item.task_workers,
                item.task_parameters,
            )
            index._templates[ItemKind.OPERATION].collect(
                item.operation_name,
                item.operation_normative,
                item.operation_workers,
                item.operation_parameters,
            )

        logger.debug(
            "Template index built",
            template_rows=template_rows,
            task_normatives=len(index._templates[ItemKind.TASK].normatives),
            operation_normatives=len(index._templates[ItemKind.OPERATION].normatives),
        )
        return index

    def normative(self, kind: ItemKind, name: str) -> float | None:
        return self._templates[kind].normatives.get(name.strip())

    def task_normative(self, name: str) -> float | None:
        return self.normative(ItemKind.TASK, name)

    def operation_normative(self, name: str) -> float | None:
        return self.normative(ItemKind.OPERATION, name)

    def worker_hint(self, kind: ItemKind, name: str) -> int | None:
        return self._templates[kind].worker_hints.get(name.strip())

    def parameters(self, kind: ItemKind, name: str) -> str | None:
        return self._templates[kind].parameters.get(name.strip())

    def __len__(self) -> int:
        return sum(len(templates.normatives) for templates in self._templates.values())
