"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.user import AppUser
from domain.models.recipe import Recipe, RecipeIngredient, RecipeStep
from domain.models.meal_plan import MealPlan, MealPlanEntry
from domain.models.shopping import ShoppingList, ShoppingListItem

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # User models
    "AppUser",
    # Recipe models
    "Recipe",
    "RecipeIngredient",
    "RecipeStep",
    # Meal plan models
    "MealPlan",
    "MealPlanEntry",
    # Shopping models
    "ShoppingList",
    "ShoppingListItem",
]
