from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import MealType
from domain.models import MealPlan, MealPlanEntry
from domain.planning import DateRange
from repositories.meal_plan_repository import MealPlanRepository, MealPlanEntryRepository
from repositories.recipe_repository import RecipeRepository
from services.base import require_user

logger = logging.getLogger("smartmeal.planner")


class PlannerService:
    """
    Weekly planner:
    - creates meal plans over an inclusive date range (default: a week from today)
    - adds and removes meals in (date, meal type) slots
    - every entry's date must lie inside its plan's range
    """

    @staticmethod
    def create_plan(
        db: Session,
        user_id: Optional[UUID],
        name: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> MealPlan:
        user_id = require_user(user_id)
        start = start_date or date.today()
        end = end_date or start + timedelta(days=settings.default_plan_days - 1)
        if start > end:
            raise ServiceValidationError("start_date must not be after end_date")

        plan = MealPlanRepository(db).create(
            MealPlan(user_id=user_id, name=name, start_date=start, end_date=end)
        )
        logger.info(f"Meal plan {plan.plan_id} created for user {user_id}: {start}..{end}")
        return plan

    @staticmethod
    def get_plan(db: Session, plan_id: UUID, user_id: Optional[UUID]) -> MealPlan:
        user_id = require_user(user_id)
        plan = MealPlanRepository(db).get_by_id_and_user(plan_id, user_id)
        if not plan:
            raise NotFoundError(f"Meal plan {plan_id} not found")
        return plan

    @staticmethod
    def list_user_plans(db: Session, user_id: Optional[UUID], limit: int = 20) -> List[MealPlan]:
        user_id = require_user(user_id)
        return MealPlanRepository(db).get_by_user_id(user_id, limit=limit)

    @staticmethod
    def add_entry(
        db: Session,
        plan_id: UUID,
        user_id: Optional[UUID],
        meal_date: date,
        meal_type: MealType,
        recipe_id: Optional[UUID] = None,
        servings: int = 1,
    ) -> MealPlanEntry:
        """
        Put a meal into a plan slot.

        Raises:
            NotFoundError: Plan not owned by user, or recipe not visible to user
            ServiceValidationError: Date outside the plan, or servings < 1
        """
        plan = PlannerService.get_plan(db, plan_id, user_id)

        if meal_date not in DateRange(plan.start_date, plan.end_date):
            raise ServiceValidationError(
                f"meal_date {meal_date.isoformat()} is outside the plan "
                f"({plan.start_date.isoformat()} to {plan.end_date.isoformat()})"
            )
        if servings < 1:
            raise ServiceValidationError("servings must be at least 1")
        if recipe_id is not None and not RecipeRepository(db).get_visible(recipe_id, plan.user_id):
            raise NotFoundError(f"Recipe {recipe_id} not found")

        entry = MealPlanEntryRepository(db).create(
            MealPlanEntry(
                plan_id=plan.plan_id,
                recipe_id=recipe_id,
                meal_date=meal_date,
                meal_type=MealType(meal_type).value,
                servings=servings,
            )
        )
        logger.info(f"Entry {entry.entry_id} added to plan {plan_id} on {meal_date}")
        return entry

    @staticmethod
    def remove_entry(db: Session, plan_id: UUID, entry_id: UUID, user_id: Optional[UUID]) -> None:
        plan = PlannerService.get_plan(db, plan_id, user_id)
        repo = MealPlanEntryRepository(db)
        entry = repo.get_by_id(entry_id)
        if not entry or entry.plan_id != plan.plan_id:
            raise NotFoundError(f"Entry {entry_id} not found in plan {plan_id}")
        repo.delete(entry_id)

    @staticmethod
    def delete_plan(db: Session, plan_id: UUID, user_id: Optional[UUID]) -> None:
        plan = PlannerService.get_plan(db, plan_id, user_id)
        MealPlanRepository(db).delete(plan.plan_id)
        logger.info(f"Meal plan {plan_id} deleted")
