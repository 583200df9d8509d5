"""Services package - Business logic layer"""

from services.aggregation import aggregate_ingredients
from services.planner_service import PlannerService
from services.recipe_service import RecipeService
from services.shopping_service import (
    GenerationResult,
    ShoppingListGenerator,
    ShoppingService,
)

__all__ = [
    "aggregate_ingredients",
    "GenerationResult",
    "PlannerService",
    "RecipeService",
    "ShoppingListGenerator",
    "ShoppingService",
]
