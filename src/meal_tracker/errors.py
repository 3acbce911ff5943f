"""Error taxonomy shared by services, adapters and the HTTP layer."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """Single field-level validation problem."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        """Return the error in its wire format."""
        return {"field": self.field, "message": self.message}


class MealTrackerError(Exception):
    """Base class for errors raised by the meal tracker."""

    message = "Meal tracker error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(MealTrackerError):
    """Raised when input is malformed, missing or out of range."""

    message = "Validation failed"

    def __init__(
        self, errors: list[FieldError], message: str | None = None
    ) -> None:
        super().__init__(message)
        self.errors = errors

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        """Build a validation error with one field problem."""
        return cls([FieldError(field, message)])


class NotFoundError(MealTrackerError):
    """Raised when an id does not match a stored record."""

    message = "Not found"


class ConflictError(MealTrackerError):
    """Raised when a write would violate a uniqueness rule."""

    message = "Conflict"

    def __init__(self, message: str | None = None, error: str | None = None) -> None:
        super().__init__(message)
        self.error = error or "Conflict"


class StoreError(MealTrackerError):
    """Raised when the persistence layer fails."""

    message = "Store operation failed"
