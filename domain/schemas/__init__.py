"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeResponse,
    RecipeIngredientCreate,
    RecipeIngredientResponse,
    RecipeStepCreate,
    RecipeStepResponse,
)
from domain.schemas.plan_schemas import (
    MealPlanCreate,
    MealPlanResponse,
    MealPlanEntryCreate,
    MealPlanEntryResponse,
)
from domain.schemas.shopping_schemas import (
    GenerateShoppingListRequest,
    GenerateShoppingListResponse,
    ShoppingListItemCreate,
    ShoppingListItemResponse,
    ShoppingListItemUpdate,
    ShoppingListResponse,
)

__all__ = [
    # Recipe schemas
    "RecipeCreate",
    "RecipeResponse",
    "RecipeIngredientCreate",
    "RecipeIngredientResponse",
    "RecipeStepCreate",
    "RecipeStepResponse",
    # Plan schemas
    "MealPlanCreate",
    "MealPlanResponse",
    "MealPlanEntryCreate",
    "MealPlanEntryResponse",
    # Shopping schemas
    "GenerateShoppingListRequest",
    "GenerateShoppingListResponse",
    "ShoppingListItemCreate",
    "ShoppingListItemResponse",
    "ShoppingListItemUpdate",
    "ShoppingListResponse",
]
