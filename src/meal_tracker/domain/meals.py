"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from enum import Enum
from uuid import UUID


class MealType(str, Enum):
    """Meal slots a day is split into."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


MACRO_FIELDS = ("calories", "protein", "carbs", "fat")


@dataclass(frozen=True)
class MacroTotals:
    """Summed macros for a set of items."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    def add(self, other: "MacroTotals | MealItem") -> "MacroTotals":
        """Return the sum of these totals and another macro carrier."""
        return MacroTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )


@dataclass(frozen=True)
class MealItem:
    """Snapshot of a food item at the moment it was logged."""

    name: str
    weight: str
    calories: float
    protein: float
    carbs: float
    fat: float

    def to_dict(self) -> dict[str, object]:
        """Return the item as a plain mapping."""
        return {
            "name": self.name,
            "weight": self.weight,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }


@dataclass(frozen=True)
class MealBucket:
    """Key identifying the single consolidated meal of a user, type and day."""

    user_id: str
    meal_type: MealType
    day: date

    @classmethod
    def for_meal(
        cls, user_id: str, meal_type: MealType, when: datetime
    ) -> "MealBucket":
        """Return the bucket an instant falls into, using the UTC calendar day."""
        return cls(user_id=user_id, meal_type=meal_type, day=utc_day(when))


@dataclass(frozen=True)
class Meal:
    """Logged meal with its ordered items."""

    id: UUID
    user_id: str
    date: datetime
    type: MealType
    items: list[MealItem]
    created_at: datetime
    updated_at: datetime

    @property
    def day(self) -> date:
        """UTC calendar day the meal is bucketed under."""
        return utc_day(self.date)

    @property
    def bucket(self) -> MealBucket:
        return MealBucket(user_id=self.user_id, meal_type=self.type, day=self.day)

    @property
    def totals(self) -> MacroTotals:
        total = MacroTotals()
        for item in self.items:
            total = total.add(item)
        return total


@dataclass(frozen=True)
class MealLogOutcome:
    """Result of logging items into a bucket."""

    meal: Meal
    created: bool

    @property
    def message(self) -> str | None:
        """Human-readable note for merges."""
        if self.created:
            return None
        return f"Items added to existing {self.meal.type.value.lower()} meal"


def utc_day(when: datetime) -> date:
    """Return the UTC calendar day of an instant; naive values are taken as UTC."""
    if when.tzinfo is None:
        return when.date()
    return when.astimezone(UTC).date()


def day_window(
    start_day: date, end_day: date | None = None
) -> tuple[datetime, datetime]:
    """Return the half-open UTC range covering the given calendar days."""
    last_day = end_day or start_day
    start = datetime(start_day.year, start_day.month, start_day.day, tzinfo=UTC)
    if last_day == date.max:
        return start, datetime.max.replace(tzinfo=UTC)
    end = datetime(last_day.year, last_day.month, last_day.day, tzinfo=UTC)
    return start, end + timedelta(days=1)
