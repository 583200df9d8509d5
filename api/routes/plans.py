from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_current_user_id, get_store
from app.config import settings
from domain.schemas.plan_schemas import (
    MealPlanCreate,
    MealPlanEntryCreate,
    MealPlanEntryResponse,
    MealPlanResponse,
)
from domain.schemas.shopping_schemas import (
    GenerateShoppingListRequest,
    GenerateShoppingListResponse,
)
from repositories.store import MealPlanningStore
from services.planner_service import PlannerService
from services.shopping_service import ShoppingListGenerator

router = APIRouter(prefix="/plans", tags=["Meal Planning"])
logger = logging.getLogger("smartmeal.api.plans")


@router.post("", response_model=MealPlanResponse, status_code=status.HTTP_201_CREATED)
def create_plan(
    body: MealPlanCreate,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    """
    Create an empty meal plan.

    When dates are omitted the plan starts today and covers
    `settings.default_plan_days` days.
    """
    plan = PlannerService.create_plan(db, user_id, body.name, body.start_date, body.end_date)
    return MealPlanResponse.model_validate(plan)


@router.get("", response_model=List[MealPlanResponse])
def list_user_plans(
    limit: int = Query(default=settings.page_size, ge=1, le=settings.max_page_size),
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    """List the user's meal plans, most recent start date first."""
    plans = PlannerService.list_user_plans(db, user_id, limit=limit)
    logger.info(f"Found {len(plans)} plans for user {user_id}")
    return [MealPlanResponse.model_validate(p) for p in plans]


@router.get("/{plan_id}", response_model=MealPlanResponse)
def get_plan(
    plan_id: UUID,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    """Get a meal plan with its entries ordered by date."""
    return MealPlanResponse.model_validate(PlannerService.get_plan(db, plan_id, user_id))


@router.delete("/{plan_id}")
def delete_plan(
    plan_id: UUID,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    PlannerService.delete_plan(db, plan_id, user_id)
    return {"status": "ok", "deleted": str(plan_id)}


@router.post(
    "/{plan_id}/entries",
    response_model=MealPlanEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_entry(
    plan_id: UUID,
    body: MealPlanEntryCreate,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    """Add a meal to a (date, meal type) slot of the plan."""
    entry = PlannerService.add_entry(
        db,
        plan_id,
        user_id,
        meal_date=body.meal_date,
        meal_type=body.meal_type,
        recipe_id=body.recipe_id,
        servings=body.servings,
    )
    return MealPlanEntryResponse.model_validate(entry)


@router.delete("/{plan_id}/entries/{entry_id}")
def remove_entry(
    plan_id: UUID,
    entry_id: UUID,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    PlannerService.remove_entry(db, plan_id, entry_id, user_id)
    return {"status": "ok", "deleted": str(entry_id)}


@router.post(
    "/{plan_id}/shopping-list",
    response_model=GenerateShoppingListResponse,
    status_code=status.HTTP_201_CREATED,
)
def generate_shopping_list(
    plan_id: UUID,
    body: GenerateShoppingListRequest,
    store: MealPlanningStore = Depends(get_store),
):
    """
    Generate a shopping list from the meals planned between two dates.

    Every planned recipe's ingredients are scaled by the entry's servings and
    merged by exact (name, unit). The list is always created, possibly empty.

    Example request:
    ```json
    {"start_date": "2024-01-01", "end_date": "2024-01-07"}
    ```
    """
    result = ShoppingListGenerator(store).generate_shopping_list(
        plan_id, body.start_date, body.end_date
    )
    return GenerateShoppingListResponse(list_id=result.list_id, item_count=result.item_count)
