"""
Ingredient aggregation for shopping list generation.

Merges the ingredient lines of every planned meal into one list of items to
buy. Two lines merge only when their name and unit are exactly equal
(case-sensitive, untrimmed); quantities are scaled by the servings of the
meal that uses them. Units are opaque: "g" and "kg" never merge.

This module is pure. It never touches the store and keeps no state between
calls.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence
from uuid import UUID

from domain.planning import (
    AggregatedItem,
    IngredientKey,
    IngredientLine,
    Number,
    PlannedMeal,
)

logger = logging.getLogger("smartmeal.aggregation")


def to_decimal(value: Optional[Number]) -> Decimal:
    """Coerce a stored quantity to Decimal; None counts as zero."""
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as Decimal("0.1") instead of its binary expansion
    return Decimal(str(value))


def aggregate_ingredients(
    meals: Iterable[PlannedMeal],
    ingredients_by_recipe: Mapping[UUID, Sequence[IngredientLine]],
) -> List[AggregatedItem]:
    """
    Merge the ingredients of all planned meals into shopping items.

    For every meal with a recipe, each ingredient line of that recipe adds
    ``quantity * meal.servings`` to the total of its (name, unit) key.
    Meals without a recipe, and recipes missing from ``ingredients_by_recipe``,
    add nothing. Servings are taken as given, so zero or negative values
    simply multiply.

    Args:
        meals: Planned meals in plan order
        ingredients_by_recipe: Ingredient lines for each referenced recipe id

    Returns:
        One AggregatedItem per distinct (name, unit), in first-seen order
    """
    totals: Dict[IngredientKey, Decimal] = {}
    meal_count = 0

    for meal in meals:
        if meal.recipe_id is None:
            continue
        meal_count += 1
        multiplier = to_decimal(meal.servings)

        for line in ingredients_by_recipe.get(meal.recipe_id, ()):
            key = line.key
            totals[key] = totals.get(key, Decimal(0)) + to_decimal(line.quantity) * multiplier

    logger.debug(
        "Aggregated %d unique ingredients from %d planned meals", len(totals), meal_count
    )

    return [
        AggregatedItem(product_name=key.name, quantity=quantity, unit=key.unit)
        for key, quantity in totals.items()
    ]
