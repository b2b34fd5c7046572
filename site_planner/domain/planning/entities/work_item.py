"""Work item entity: one row of the project's flat task/operation list."""

from pydantic import AliasChoices, Field

from ...shared.base import InputRecord, RawText
from ...shared.parsing import is_blank, parse_number
from ..value_objects.coordinates import GeoPoint
from ..value_objects.enums import ItemKind


class WorkItem(InputRecord):
    """
    A task or an operation of a construction project.

    A row is an operation when it carries an operation id, otherwise it is a
    task. Rows whose status is not the active marker are never scheduled; they
    only feed the template index. Task fields are present on operation rows as
    well (the operation's parent task).
    """

    project_id: RawText = Field(default="", alias="ПроектID")
    project_name: RawText = Field(default="", alias="Проект")
    project_start: RawText = Field(default="", alias="Старт")
    status: RawText = Field(default="", alias="Статус проекта")

    task_id: RawText = Field(default="", alias="Задача проектаID")
    task_name: RawText = Field(default="", alias="Задача проекта")
    operation_id: RawText = Field(default="", alias="ОперацияID")
    operation_name: RawText = Field(default="", alias="Операция")

    quantity: RawText = Field(default="", alias="Кол-во")
    task_duration: RawText = Field(default="", alias="Длительность задачи")
    operation_duration: RawText = Field(default="", alias="Длительность операции")
    task_normative: RawText = Field(default="", alias="Норматив задачи")
    operation_normative: RawText = Field(default="", alias="Норматив операции")

    previous_task: RawText = Field(default="", alias="Предыдущая Задача")
    previous_operation: RawText = Field(default="", alias="Предыдущая Операция")

    zone_id: RawText = Field(
        default="",
        validation_alias=AliasChoices("ЗахваткаID", "Захватка", "zone_id"),
    )
    zone_coordinates: RawText = Field(default="", alias="Захватка (координаты)")

    task_parameters: RawText = Field(default="", alias="Параметры задачи")
    operation_parameters: RawText = Field(default="", alias="Параметры операции")
    task_workers: RawText = Field(default="", alias="Исполнителей задачи")
    operation_workers: RawText = Field(default="", alias="Исполнителей операции")

    @property
    def kind(self) -> ItemKind:
        if is_blank(self.operation_id):
            return ItemKind.TASK
        return ItemKind.OPERATION

    @property
    def is_operation(self) -> bool:
        return self.kind is ItemKind.OPERATION

    @property
    def item_id(self) -> str:
        return self.operation_id if self.is_operation else self.task_id

    @property
    def name(self) -> str:
        """Display name; the operation name for operations, else the task name."""
        value = self.operation_name if self.is_operation else self.task_name
        return value.strip()

    @property
    def existing_duration(self) -> float | None:
        """Duration already stored on the row, if it is a positive number."""
        raw = self.operation_duration if self.is_operation else self.task_duration
        minutes = parse_number(raw)
        if minutes is None or minutes <= 0:
            return None
        return minutes

    @property
    def dependency(self) -> str:
        """Name of the predecessor of the same kind, or an empty string."""
        value = self.previous_operation if self.is_operation else self.previous_task
        return value.strip()

    @property
    def own_parameters(self) -> str:
        return self.operation_parameters if self.is_operation else self.task_parameters

    @property
    def own_worker_hint(self) -> str:
        return self.operation_workers if self.is_operation else self.task_workers

    @property
    def zone(self) -> str:
        return self.zone_id.strip()

    @property
    def is_zoned(self) -> bool:
        return bool(self.zone)

    @property
    def location(self) -> GeoPoint | None:
        return GeoPoint.parse(self.zone_coordinates)

    def is_active(self, marker: str) -> bool:
        """Exact comparison against the active status literal."""
        return self.status == marker
