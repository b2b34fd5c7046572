"""Worker entity for site personnel."""

from pydantic import Field

from ...shared.base import InputRecord, RawText
from ...shared.parsing import is_blank
from ..value_objects.busy_time import BusySlot, parse_busy_time
from ..value_objects.coordinates import GeoPoint


class Worker(InputRecord):
    """
    A person that can be assigned to scheduled items.

    Qualification level, role and qualification label are matched against the
    constraint predicates of an item; busy time and location feed the
    availability check and the distance ranking.
    """

    worker_id: RawText = Field(default="", alias="ПользовательID")
    name: RawText = Field(default="", alias="Исполнитель")
    qualification_level: RawText = Field(default="", alias="Квалификация -> Уровень")
    role: RawText = Field(default="", alias="Роль")
    qualification: RawText = Field(default="", alias="Квалификация")
    busy_time: RawText = Field(default="", alias="Занятое время")
    coordinates: RawText = Field(default="", alias="Координаты")

    @property
    def busy_slots(self) -> list[BusySlot]:
        return parse_busy_time(self.busy_time)

    @property
    def location(self) -> GeoPoint | None:
        return GeoPoint.parse(self.coordinates)

    @property
    def is_identified(self) -> bool:
        """True when the row carries a user id."""
        return not is_blank(self.worker_id)

    @property
    def display_name(self) -> str:
        return self.name or self.worker_id
