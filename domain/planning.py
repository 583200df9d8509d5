"""
Plain value types exchanged between the store and the shopping list services.

They carry only what aggregation needs and hold no session state, so fake
stores in tests can build them directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Union
from uuid import UUID

Number = Union[int, float, Decimal]


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range."""

    start: date
    end: date

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class IngredientKey:
    """Composite merge key: exact ingredient name plus exact unit."""

    name: str
    unit: Optional[str]


@dataclass(frozen=True)
class IngredientLine:
    """One ingredient row of a recipe as read from the store."""

    name: str
    quantity: Optional[Number]
    unit: Optional[str]

    @property
    def key(self) -> IngredientKey:
        return IngredientKey(self.name, self.unit)


@dataclass(frozen=True)
class PlannedMeal:
    """The parts of a meal plan entry that matter for aggregation."""

    recipe_id: Optional[UUID]
    servings: int = 1
    meal_date: Optional[date] = None


@dataclass(frozen=True)
class AggregatedItem:
    """A merged shopping item."""

    product_name: str
    quantity: Decimal
    unit: Optional[str]

    @property
    def key(self) -> IngredientKey:
        return IngredientKey(self.product_name, self.unit)
