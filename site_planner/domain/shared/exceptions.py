"""
Domain Exceptions

Error taxonomy of the planning core. Problems with business data (malformed
fragments, missing templates, worker shortfalls) are recovered locally or
reported as warnings on the result. Only an inconsistent configuration and a
missing run precondition are raised.
"""

from enum import Enum

DetailValue = str | int | bool | None


class ErrorType(str, Enum):
    """Discriminator carried by every domain error."""

    VALIDATION = "validation"
    MISSING_INPUT = "missing_input"


class DomainError(Exception):
    """Base class for planning errors that can be reported as data."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, DetailValue] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = dict(details or {})

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """A configuration value breaks a domain rule."""

    def __init__(
        self,
        field_name: str,
        value: object,
        reason: str,
        error_code: str = "VALIDATION_ERROR",
    ) -> None:
        self.field_name = field_name
        self.value = None if value is None else str(value)
        self.error_code = error_code
        super().__init__(
            f"Invalid {field_name} {self.value!r}: {reason}",
            ErrorType.VALIDATION,
            {"field": field_name, "value": self.value, "error_code": error_code},
        )

    def to_dict(self) -> dict[str, object]:
        return {**super().to_dict(), "field": self.field_name}


class InvalidWorkingHoursError(ValidationError):
    """Raised when the working-hours layout of a day is inconsistent."""

    def __init__(self, day_start: int, day_end: int, lunch_start: int) -> None:
        self.day_start = day_start
        self.day_end = day_end
        self.lunch_start = lunch_start
        super().__init__(
            "working_hours",
            f"{day_start}-{day_end} (lunch {lunch_start})",
            "expected 0 <= day_start < lunch_start and lunch_start + 1 <= day_end <= 24",
            error_code="INVALID_WORKING_HOURS",
        )


class MissingRunInputError(DomainError):
    """Raised before scheduling starts when a run precondition is missing."""

    def __init__(self, message: str, missing: str) -> None:
        super().__init__(message, ErrorType.MISSING_INPUT, {"missing": missing})
        self.missing = missing
