"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository
from repositories.recipe_repository import (
    RecipeRepository,
    RecipeIngredientRepository,
    RecipeStepRepository,
)
from repositories.meal_plan_repository import MealPlanRepository, MealPlanEntryRepository
from repositories.shopping_repository import (
    ShoppingListRepository,
    ShoppingListItemRepository,
)
from repositories.store import MealPlanningStore, SqlMealPlanningStore

__all__ = [
    "BaseRepository",
    "UserRepository",
    "RecipeRepository",
    "RecipeIngredientRepository",
    "RecipeStepRepository",
    "MealPlanRepository",
    "MealPlanEntryRepository",
    "ShoppingListRepository",
    "ShoppingListItemRepository",
    "MealPlanningStore",
    "SqlMealPlanningStore",
]
