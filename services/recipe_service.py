"""Recipe library service"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from domain.models import Recipe, RecipeIngredient, RecipeStep
from domain.schemas.recipe_schemas import RecipeCreate, RecipeIngredientCreate, RecipeStepAdd
from repositories.meal_plan_repository import MealPlanEntryRepository
from repositories.recipe_repository import (
    RecipeRepository,
    RecipeIngredientRepository,
    RecipeStepRepository,
)
from services.base import require_user

logger = logging.getLogger("smartmeal.recipes")


class RecipeService:
    """Business logic for a user's recipe library."""

    @staticmethod
    def create_recipe(db: Session, user_id: Optional[UUID], data: RecipeCreate) -> Recipe:
        """Create a recipe together with its ingredient lines and steps."""
        user_id = require_user(user_id)
        recipe = Recipe(
            user_id=user_id,
            title=data.title,
            description=data.description,
            prep_time=data.prep_time,
            cook_time=data.cook_time,
            servings=data.servings,
            is_public=data.is_public,
            ingredients=[
                RecipeIngredient(
                    ingredient_name=ing.ingredient_name,
                    quantity=ing.quantity,
                    unit=ing.unit,
                )
                for ing in data.ingredients
            ],
            steps=[
                RecipeStep(step_number=step.step_number, instruction=step.instruction)
                for step in data.steps
            ],
        )
        recipe = RecipeRepository(db).create(recipe)
        logger.info(
            f"Recipe created: recipe_id={recipe.recipe_id}, "
            f"ingredients={len(data.ingredients)}"
        )
        return recipe

    @staticmethod
    def get_recipe(db: Session, recipe_id: UUID, user_id: Optional[UUID]) -> Recipe:
        """Get a recipe the user owns or that is public."""
        user_id = require_user(user_id)
        recipe = RecipeRepository(db).get_visible(recipe_id, user_id)
        if not recipe:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        return recipe

    @staticmethod
    def list_recipes(
        db: Session,
        user_id: Optional[UUID],
        query: Optional[str] = None,
        public_only: bool = False,
        limit: int = 50,
    ) -> List[Recipe]:
        user_id = require_user(user_id)
        return RecipeRepository(db).search(
            user_id, query=query, public_only=public_only, limit=limit
        )

    @staticmethod
    def _get_owned(db: Session, recipe_id: UUID, user_id: Optional[UUID]) -> Recipe:
        user_id = require_user(user_id)
        recipe = RecipeRepository(db).get_by_id_and_user(recipe_id, user_id)
        if not recipe:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        return recipe

    @staticmethod
    def add_ingredient(
        db: Session, recipe_id: UUID, user_id: Optional[UUID], data: RecipeIngredientCreate
    ) -> RecipeIngredient:
        recipe = RecipeService._get_owned(db, recipe_id, user_id)
        return RecipeIngredientRepository(db).create(
            RecipeIngredient(
                recipe_id=recipe.recipe_id,
                ingredient_name=data.ingredient_name,
                quantity=data.quantity,
                unit=data.unit,
            )
        )

    @staticmethod
    def remove_ingredient(
        db: Session, recipe_id: UUID, ingredient_row_id: UUID, user_id: Optional[UUID]
    ) -> None:
        recipe = RecipeService._get_owned(db, recipe_id, user_id)
        repo = RecipeIngredientRepository(db)
        row = repo.get_by_id(ingredient_row_id)
        if not row or row.recipe_id != recipe.recipe_id:
            raise NotFoundError(f"Ingredient {ingredient_row_id} not found in recipe {recipe_id}")
        repo.delete(ingredient_row_id)

    @staticmethod
    def add_step(
        db: Session, recipe_id: UUID, user_id: Optional[UUID], data: RecipeStepAdd
    ) -> RecipeStep:
        """Append a step to an owned recipe."""
        recipe = RecipeService._get_owned(db, recipe_id, user_id)
        repo = RecipeStepRepository(db)
        return repo.create(
            RecipeStep(
                recipe_id=recipe.recipe_id,
                step_number=repo.next_step_number(recipe.recipe_id),
                instruction=data.instruction,
            )
        )

    @staticmethod
    def remove_step(
        db: Session, recipe_id: UUID, step_id: UUID, user_id: Optional[UUID]
    ) -> None:
        recipe = RecipeService._get_owned(db, recipe_id, user_id)
        repo = RecipeStepRepository(db)
        step = repo.get_by_id(step_id)
        if not step or step.recipe_id != recipe.recipe_id:
            raise NotFoundError(f"Step {step_id} not found in recipe {recipe_id}")
        repo.delete(step_id)

    @staticmethod
    def copy_recipe(db: Session, recipe_id: UUID, user_id: Optional[UUID]) -> Recipe:
        """
        Copy a visible recipe into the user's library.

        The copy is private and owned by the user; ingredient lines and steps
        are duplicated, so later edits to either recipe do not affect the other.
        """
        source = RecipeService.get_recipe(db, recipe_id, user_id)
        copy = Recipe(
            user_id=user_id,
            title=source.title,
            description=source.description,
            prep_time=source.prep_time,
            cook_time=source.cook_time,
            servings=source.servings,
            is_public=False,
            ingredients=[
                RecipeIngredient(
                    ingredient_name=ing.ingredient_name,
                    quantity=ing.quantity,
                    unit=ing.unit,
                )
                for ing in source.ingredients
            ],
            steps=[
                RecipeStep(step_number=step.step_number, instruction=step.instruction)
                for step in source.steps
            ],
        )
        copy = RecipeRepository(db).create(copy)
        logger.info(f"Recipe {recipe_id} copied to {copy.recipe_id} for user {user_id}")
        return copy

    @staticmethod
    def delete_recipe(db: Session, recipe_id: UUID, user_id: Optional[UUID]) -> None:
        """Delete an owned recipe. Meal plan entries using it keep a null recipe."""
        recipe = RecipeService._get_owned(db, recipe_id, user_id)
        MealPlanEntryRepository(db).detach_recipe(recipe.recipe_id)
        RecipeRepository(db).delete(recipe.recipe_id)
        logger.info(f"Recipe deleted: {recipe_id}")
