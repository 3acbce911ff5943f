"""Pydantic input models shared by the services and the HTTP layer."""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Annotated, Any, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    TypeAdapter,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from meal_tracker.domain.meals import MealItem, MealType
from meal_tracker.domain.profile import ActivityLevel, Gender, Goal
from meal_tracker.errors import FieldError, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

_REQUEST_LOCATIONS = {"body", "query", "path", "header"}

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Amount = Annotated[float, Field(ge=0, allow_inf_nan=False)]

_USER_ID = TypeAdapter(NonBlankStr)


class InputModel(BaseModel):
    """Base for validated inputs; accepts field names, aliases and objects."""

    model_config = ConfigDict(
        populate_by_name=True, from_attributes=True, str_strip_whitespace=True
    )

    @field_validator("*", mode="before")
    @classmethod
    def reject_unrepresentable_numbers(cls, value: Any) -> Any:
        """Report integers too large for a float instead of overflowing."""
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                float(value)
            except OverflowError as exc:
                raise ValueError("Number is too large") from exc
        return value


class MealItemInput(InputModel):
    """Item of a logged meal."""

    name: NonBlankStr
    weight: NonBlankStr
    calories: Amount
    protein: Amount
    carbs: Amount
    fat: Amount

    def to_item(self) -> MealItem:
        return MealItem(**self.model_dump())


class MealInput(InputModel):
    """Date, type and items of a meal."""

    date: datetime
    type: MealType
    items: list[MealItemInput] = Field(min_length=1)

    @field_validator("date")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        """Treat naive datetimes as UTC."""
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class FoodInput(InputModel):
    """Food catalog entry fields."""

    name: NonBlankStr
    weight: NonBlankStr
    calories: Amount
    protein: Amount
    carbs: Amount
    fat: Amount


class ProfileInput(InputModel):
    """Profile fields keyed by their wire names."""

    email: EmailStr
    goal: Goal
    target_weight: Amount = Field(alias="targetWeight")
    height: Amount
    current_weight: Amount = Field(alias="currentWeight")
    target_calories: Amount = Field(alias="targetCalories")
    target_protein: Amount = Field(alias="targetProtein")
    target_carbs: Amount = Field(alias="targetCarbs")
    target_fat: Amount = Field(alias="targetFat")

    @field_validator("email")
    @classmethod
    def lowercase(cls, value: str) -> str:
        return value.lower()


class GoalsInput(InputModel):
    """Biometrics used by the goal calculator."""

    height: Amount
    current_weight: Amount = Field(alias="currentWeight")
    goal: Goal
    age: Amount = 30
    gender: Gender = Gender.MALE
    activity_level: ActivityLevel = Field(
        default=ActivityLevel.LIGHTLY_ACTIVE, alias="activityLevel"
    )


def validate_input(
    model: type[ModelT], data: Mapping[str, object] | BaseModel
) -> ModelT:
    """Validate data against a model, raising the domain validation error."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(field_errors(exc.errors())) from exc


def require_user_id(user_id: object) -> str:
    """Return the user id, rejecting blanks."""
    try:
        return _USER_ID.validate_python(user_id)
    except PydanticValidationError as exc:
        raise ValidationError.single("userId", "User id is required") from exc


def field_errors(errors: Iterable[Mapping[str, Any]]) -> list[FieldError]:
    """Convert pydantic error dicts into field errors."""
    return [
        FieldError(field_path(error.get("loc", ())), str(error.get("msg", "")))
        for error in errors
    ]


def field_path(location: Iterable[object]) -> str:
    """Render an error location as a path like ``items[0].calories``."""
    path = ""
    for part in location:
        if not path and part in _REQUEST_LOCATIONS:
            continue
        if isinstance(part, int) and path:
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or "body"
