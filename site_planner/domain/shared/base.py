"""Base classes for domain records and value objects."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


# Raw host text; nulls are read as empty strings
RawText = Annotated[str, BeforeValidator(_none_to_empty)]


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __eq__(self, other: Any) -> bool:
        """Value objects are equal if all their attributes are equal."""
        if not isinstance(other, self.__class__):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash(tuple(sorted((k, repr(v)) for k, v in self.model_dump().items())))


class InputRecord(BaseModel):
    """
    Base class for rows supplied by the host platform.

    Rows arrive already decoded, keyed either by the English field names or by
    the host's own column captions (declared as aliases). Every value is kept
    as the raw string the host delivered; parsing happens in the domain
    services so that malformed fragments can be skipped locally.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=False,
        coerce_numbers_to_str=True,
    )


class Entity(BaseModel):
    """Base class for records that are built up during a planning run."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)
