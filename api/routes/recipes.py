"""
Recipe routes - the user's recipe library.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from api.dependencies import get_db, get_current_user_id
from app.config import settings
from domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeResponse,
    RecipeIngredientCreate,
    RecipeIngredientResponse,
    RecipeStepAdd,
    RecipeStepResponse,
)
from services.recipe_service import RecipeService

router = APIRouter(prefix="/recipes", tags=["Recipes"])
logger = logging.getLogger("smartmeal.api.recipes")


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    body: RecipeCreate,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    """
    Add a recipe with its ingredients and steps.

    Example request:
    ```json
    {
        "title": "Fried Rice",
        "servings": 2,
        "ingredients": [
            {"ingredient_name": "Rice", "quantity": 100, "unit": "g"},
            {"ingredient_name": "Egg", "quantity": 2, "unit": "pcs"}
        ]
    }
    ```
    """
    recipe = RecipeService.create_recipe(db, user_id, body)
    return RecipeResponse.model_validate(recipe)


@router.get("", response_model=List[RecipeResponse])
def list_recipes(
    q: Optional[str] = Query(default=None, description="Search in recipe titles"),
    public_only: bool = Query(default=False, description="Only public recipes"),
    limit: int = Query(default=settings.recipe_page_size, ge=1, le=settings.max_page_size),
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    """List the user's own recipes plus public ones, ordered by title."""
    recipes = RecipeService.list_recipes(db, user_id, query=q, public_only=public_only, limit=limit)
    return [RecipeResponse.model_validate(r) for r in recipes]


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    return RecipeResponse.model_validate(RecipeService.get_recipe(db, recipe_id, user_id))


@router.delete("/{recipe_id}")
def delete_recipe(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    RecipeService.delete_recipe(db, recipe_id, user_id)
    return {"status": "ok", "deleted": str(recipe_id)}


@router.post(
    "/{recipe_id}/ingredients",
    response_model=RecipeIngredientResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_ingredient(
    recipe_id: UUID,
    body: RecipeIngredientCreate,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    row = RecipeService.add_ingredient(db, recipe_id, user_id, body)
    return RecipeIngredientResponse.model_validate(row)


@router.delete("/{recipe_id}/ingredients/{ingredient_row_id}")
def remove_ingredient(
    recipe_id: UUID,
    ingredient_row_id: UUID,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    RecipeService.remove_ingredient(db, recipe_id, ingredient_row_id, user_id)
    return {"status": "ok", "deleted": str(ingredient_row_id)}


@router.post(
    "/{recipe_id}/copy",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
)
def copy_recipe(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    """Copy a public (or own) recipe into the user's library as a private recipe."""
    return RecipeResponse.model_validate(RecipeService.copy_recipe(db, recipe_id, user_id))


@router.post(
    "/{recipe_id}/steps",
    response_model=RecipeStepResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_step(
    recipe_id: UUID,
    body: RecipeStepAdd,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    step = RecipeService.add_step(db, recipe_id, user_id, body)
    return RecipeStepResponse.model_validate(step)


@router.delete("/{recipe_id}/steps/{step_id}")
def remove_step(
    recipe_id: UUID,
    step_id: UUID,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    RecipeService.remove_step(db, recipe_id, step_id, user_id)
    return {"status": "ok", "deleted": str(step_id)}
