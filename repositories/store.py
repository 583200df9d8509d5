"""
Store interface used by shopping list generation, and its SQLAlchemy implementation.

The service layer only sees MealPlanningStore, so tests can hand it a fake
and production code hands it SqlMealPlanningStore bound to a request session.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import FetchFailureError, WriteFailureError
from domain.models import ShoppingList, ShoppingListItem
from domain.planning import AggregatedItem, DateRange, IngredientLine, PlannedMeal
from repositories.meal_plan_repository import MealPlanEntryRepository, MealPlanRepository
from repositories.recipe_repository import RecipeIngredientRepository
from repositories.shopping_repository import (
    ShoppingListRepository,
    ShoppingListItemRepository,
)

logger = logging.getLogger("smartmeal.store")


class MealPlanningStore(ABC):
    """Persistent store operations needed to materialize a shopping list."""

    @abstractmethod
    def get_current_user_id(self) -> Optional[UUID]:
        """Id of the authenticated user, or None"""

    @abstractmethod
    def query_meal_plan_entries(
        self, plan_id: UUID, date_range: DateRange
    ) -> List[PlannedMeal]:
        """Entries of the plan whose meal date lies in the inclusive range"""

    @abstractmethod
    def query_recipe_ingredients(self, recipe_id: UUID) -> List[IngredientLine]:
        """Ingredient lines of one recipe"""

    @abstractmethod
    def insert_shopping_list(
        self, owner_id: UUID, meal_plan_id: Optional[UUID], name: str
    ) -> UUID:
        """Create a shopping list row and return its id"""

    @abstractmethod
    def insert_shopping_list_items(
        self, list_id: UUID, items: Sequence[AggregatedItem]
    ) -> None:
        """Insert items under a list, all unpurchased"""


class SqlMealPlanningStore(MealPlanningStore):
    """
    MealPlanningStore over a SQLAlchemy session.

    Reads raise FetchFailureError and writes raise WriteFailureError when the
    database call fails; the session is rolled back first. The list row and
    its items are committed separately, so a failed item insert leaves the
    list in place.

    Entries are only read from plans owned by the current user, and a new
    list is linked to its plan only when the owner of the list owns the plan.
    """

    def __init__(self, db: Session, current_user_id: Optional[UUID] = None):
        self.db = db
        self.current_user_id = current_user_id
        self.plans = MealPlanRepository(db)
        self.entries = MealPlanEntryRepository(db)
        self.ingredients = RecipeIngredientRepository(db)
        self.lists = ShoppingListRepository(db)
        self.items = ShoppingListItemRepository(db)

    def get_current_user_id(self) -> Optional[UUID]:
        return self.current_user_id

    def query_meal_plan_entries(
        self, plan_id: UUID, date_range: DateRange
    ) -> List[PlannedMeal]:
        if self.current_user_id is None:
            return []
        try:
            rows = self.entries.get_by_plan_and_range(
                plan_id, date_range.start, date_range.end, user_id=self.current_user_id
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to load entries for plan {plan_id}: {e}")
            raise FetchFailureError(
                f"Failed to load meal plan entries for plan {plan_id}"
            ) from e

        return [
            PlannedMeal(
                recipe_id=row.recipe_id,
                servings=row.servings if row.servings is not None else 1,
                meal_date=row.meal_date,
            )
            for row in rows
        ]

    def query_recipe_ingredients(self, recipe_id: UUID) -> List[IngredientLine]:
        try:
            rows = self.ingredients.get_by_recipe_id(recipe_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to load ingredients for recipe {recipe_id}: {e}")
            raise FetchFailureError(
                f"Failed to load ingredients for recipe {recipe_id}"
            ) from e

        return [
            IngredientLine(name=row.ingredient_name, quantity=row.quantity, unit=row.unit)
            for row in rows
        ]

    def insert_shopping_list(
        self, owner_id: UUID, meal_plan_id: Optional[UUID], name: str
    ) -> UUID:
        try:
            plan = (
                self.plans.get_by_id_and_user(meal_plan_id, owner_id)
                if meal_plan_id is not None
                else None
            )
            shopping_list = self.lists.create(
                ShoppingList(
                    user_id=owner_id,
                    plan_id=plan.plan_id if plan else None,
                    name=name,
                )
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create shopping list '{name}': {e}")
            raise WriteFailureError("Failed to create shopping list") from e
        return shopping_list.list_id

    def insert_shopping_list_items(
        self, list_id: UUID, items: Sequence[AggregatedItem]
    ) -> None:
        rows = [
            ShoppingListItem(
                list_id=list_id,
                product_name=item.product_name,
                quantity=item.quantity,
                unit=item.unit,
                is_purchased=False,
            )
            for item in items
        ]
        try:
            self.items.bulk_create(rows)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to insert {len(rows)} items into list {list_id}: {e}")
            raise WriteFailureError(
                f"Failed to insert items into shopping list {list_id}", list_id=list_id
            ) from e
