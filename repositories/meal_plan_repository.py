"""
Meal Plan Repository - Data access layer for meal plan operations
"""

from datetime import date
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import MealPlan, MealPlanEntry


class MealPlanRepository(BaseRepository[MealPlan]):
    """Repository for meal plan data access"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlan)

    def get_by_id_and_user(self, plan_id: UUID, user_id: UUID) -> Optional[MealPlan]:
        """Get meal plan by ID for specific user"""
        return (
            self.db.query(MealPlan)
            .filter(MealPlan.plan_id == plan_id, MealPlan.user_id == user_id)
            .first()
        )

    def get_by_user_id(self, user_id: UUID, limit: int = 20) -> List[MealPlan]:
        """Get a user's meal plans, most recent first"""
        return (
            self.db.query(MealPlan)
            .filter(MealPlan.user_id == user_id)
            .order_by(MealPlan.start_date.desc())
            .limit(limit)
            .all()
        )


class MealPlanEntryRepository(BaseRepository[MealPlanEntry]):
    """Repository for meal plan entry data access"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlanEntry)

    def get_by_plan_id(self, plan_id: UUID) -> List[MealPlanEntry]:
        """Get all entries of a plan"""
        return (
            self.db.query(MealPlanEntry)
            .filter(MealPlanEntry.plan_id == plan_id)
            .order_by(MealPlanEntry.meal_date)
            .all()
        )

    def detach_recipe(self, recipe_id: UUID) -> int:
        """Null the recipe reference of every entry using it (no commit)"""
        return (
            self.db.query(MealPlanEntry)
            .filter(MealPlanEntry.recipe_id == recipe_id)
            .update({MealPlanEntry.recipe_id: None}, synchronize_session=False)
        )

    def get_by_plan_and_range(
        self,
        plan_id: UUID,
        start_date: date,
        end_date: date,
        user_id: Optional[UUID] = None,
    ) -> List[MealPlanEntry]:
        """
        Get entries of a plan with start_date <= meal_date <= end_date.

        With ``user_id`` only entries of a plan owned by that user are
        returned; another user's plan yields no entries.
        """
        query = self.db.query(MealPlanEntry)
        if user_id is not None:
            query = query.join(MealPlan, MealPlan.plan_id == MealPlanEntry.plan_id).filter(
                MealPlan.user_id == user_id
            )
        return (
            query.filter(
                MealPlanEntry.plan_id == plan_id,
                MealPlanEntry.meal_date >= start_date,
                MealPlanEntry.meal_date <= end_date,
            )
            .order_by(MealPlanEntry.meal_date)
            .all()
        )
