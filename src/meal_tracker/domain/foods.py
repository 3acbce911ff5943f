"""Domain models for the food catalog."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class FoodItem:
    """Catalog entry a meal item can be snapshotted from."""

    id: UUID
    name: str
    weight: str
    calories: float
    protein: float
    carbs: float
    fat: float
    created_at: datetime | None = None
    updated_at: datetime | None = None
