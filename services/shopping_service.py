"""Shopping list service"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, List, Optional, TypeVar, Union
from uuid import UUID

from sqlalchemy.orm import Session

from app.exceptions import (
    SmartMealError,
    FetchFailureError,
    WriteFailureError,
    NotFoundError,
    ServiceValidationError,
)
from domain.models import ShoppingList, ShoppingListItem
from domain.planning import DateRange, IngredientLine, PlannedMeal
from repositories.shopping_repository import (
    ShoppingListRepository,
    ShoppingListItemRepository,
)
from repositories.store import MealPlanningStore
from services.aggregation import aggregate_ingredients
from services.base import parse_date, require_user

logger = logging.getLogger("smartmeal.shopping")

T = TypeVar("T")


@dataclass(frozen=True)
class GenerationResult:
    list_id: UUID
    item_count: int


def shopping_list_name(start_date: date, end_date: date) -> str:
    """Name given to a list generated for a date range"""
    return f"Shopping List for {start_date.isoformat()} to {end_date.isoformat()}"


class ShoppingListGenerator:
    """Turns the meals planned in a date range into a new shopping list."""

    def __init__(self, store: MealPlanningStore):
        self.store = store

    def generate_shopping_list(
        self,
        meal_plan_id: UUID,
        start_date: Union[date, str],
        end_date: Union[date, str],
    ) -> GenerationResult:
        """
        Create a shopping list from a meal plan's entries in [start_date, end_date].

        Algorithm:
        1. Resolve the current user
        2. Load the plan's entries dated inside the range
        3. Load the ingredients of every referenced recipe (once per recipe)
        4. Merge ingredients by exact (name, unit), scaled by servings
        5. Create the shopping list, then insert its items

        Args:
            meal_plan_id: Meal plan UUID
            start_date: First day, inclusive (date or YYYY-MM-DD)
            end_date: Last day, inclusive (date or YYYY-MM-DD)

        Returns:
            GenerationResult with the new list id and number of items

        Raises:
            NotAuthenticatedError: No current user; nothing was read or written
            ServiceValidationError: Bad or inverted dates
            FetchFailureError: A read failed; nothing was written
            WriteFailureError: List or item insert failed. When ``list_id`` is
                set, that list exists with zero or partial items.
        """
        user_id = require_user(self.store.get_current_user_id())

        start = parse_date(start_date, "start_date")
        end = parse_date(end_date, "end_date")
        if start > end:
            raise ServiceValidationError(
                "start_date must not be after end_date",
                details={"start_date": start.isoformat(), "end_date": end.isoformat()},
            )
        date_range = DateRange(start, end)

        logger.info(
            f"Generating shopping list for plan {meal_plan_id}, "
            f"{start.isoformat()}..{end.isoformat()}, user {user_id}"
        )

        meals = self._fetch(
            lambda: self.store.query_meal_plan_entries(meal_plan_id, date_range),
            f"meal plan entries for plan {meal_plan_id}",
        )
        # Stores are expected to filter by date already
        meals = [m for m in meals if m.meal_date is None or m.meal_date in date_range]

        ingredients_by_recipe = self._load_ingredients(meals)
        items = aggregate_ingredients(meals, ingredients_by_recipe)

        logger.info(
            f"Aggregated {len(items)} unique ingredients from {len(meals)} meal entries"
        )

        name = shopping_list_name(start, end)
        list_id = self._write(
            lambda: self.store.insert_shopping_list(user_id, meal_plan_id, name),
            "Failed to create shopping list",
        )

        if items:
            self._write(
                lambda: self.store.insert_shopping_list_items(list_id, items),
                f"Failed to insert items into shopping list {list_id}",
                list_id=list_id,
            )

        logger.info(f"Shopping list created: list_id={list_id}, items={len(items)}")
        return GenerationResult(list_id=list_id, item_count=len(items))

    def _load_ingredients(
        self, meals: List[PlannedMeal]
    ) -> Dict[UUID, List[IngredientLine]]:
        ingredients_by_recipe: Dict[UUID, List[IngredientLine]] = {}
        for meal in meals:
            recipe_id = meal.recipe_id
            if recipe_id is None or recipe_id in ingredients_by_recipe:
                continue
            ingredients_by_recipe[recipe_id] = self._fetch(
                lambda: self.store.query_recipe_ingredients(recipe_id),
                f"ingredients for recipe {recipe_id}",
            )
        return ingredients_by_recipe

    @staticmethod
    def _fetch(read: Callable[[], T], what: str) -> T:
        try:
            return read()
        except SmartMealError:
            raise
        except Exception as e:
            logger.error(f"Failed to load {what}: {e}")
            raise FetchFailureError(f"Failed to load {what}") from e

    @staticmethod
    def _write(
        write: Callable[[], T], message: str, list_id: Optional[UUID] = None
    ) -> T:
        try:
            return write()
        except WriteFailureError as e:
            if e.list_id is None and list_id is not None:
                e.list_id = list_id
            raise
        except SmartMealError:
            raise
        except Exception as e:
            logger.error(f"{message}: {e}")
            raise WriteFailureError(message, list_id=list_id) from e


class ShoppingService:
    """Business logic for managing a user's shopping lists after creation."""

    @staticmethod
    def get_user_shopping_lists(
        db: Session, user_id: Optional[UUID], limit: int = 20
    ) -> List[ShoppingList]:
        """Get all shopping lists for a user, newest first."""
        user_id = require_user(user_id)
        return ShoppingListRepository(db).get_by_user_id(user_id, limit=limit)

    @staticmethod
    def get_shopping_list(
        db: Session, list_id: UUID, user_id: Optional[UUID]
    ) -> ShoppingList:
        """Get a shopping list by ID (must belong to user)."""
        user_id = require_user(user_id)
        shopping_list = ShoppingListRepository(db).get_by_id_and_user(list_id, user_id)
        if not shopping_list:
            raise NotFoundError(f"Shopping list {list_id} not found")
        return shopping_list

    @staticmethod
    def add_item(
        db: Session,
        list_id: UUID,
        user_id: Optional[UUID],
        product_name: str,
        quantity: Optional[Decimal] = None,
        unit: Optional[str] = None,
    ) -> ShoppingListItem:
        """Add a hand-entered item to a list. Items are not merged."""
        shopping_list = ShoppingService.get_shopping_list(db, list_id, user_id)
        item = ShoppingListItemRepository(db).create(
            ShoppingListItem(
                list_id=shopping_list.list_id,
                product_name=product_name,
                quantity=quantity,
                unit=unit,
                is_purchased=False,
            )
        )
        logger.info(f"Item {item.list_item_id} added to list {list_id}")
        return item

    @staticmethod
    def set_item_purchased(
        db: Session, list_item_id: UUID, user_id: Optional[UUID], is_purchased: bool
    ) -> ShoppingListItem:
        """Mark an item purchased or not purchased."""
        user_id = require_user(user_id)
        repo = ShoppingListItemRepository(db)
        item = repo.get_by_id_and_user(list_item_id, user_id)
        if not item:
            raise NotFoundError(f"Shopping list item {list_item_id} not found")
        item.is_purchased = is_purchased
        return repo.update(item)

    @staticmethod
    def delete_item(db: Session, list_item_id: UUID, user_id: Optional[UUID]) -> None:
        """Remove an item from its list."""
        user_id = require_user(user_id)
        repo = ShoppingListItemRepository(db)
        item = repo.get_by_id_and_user(list_item_id, user_id)
        if not item:
            raise NotFoundError(f"Shopping list item {list_item_id} not found")
        repo.delete(item.list_item_id)

    @staticmethod
    def delete_shopping_list(
        db: Session, list_id: UUID, user_id: Optional[UUID]
    ) -> None:
        """Delete a shopping list and its items (must belong to user)."""
        user_id = require_user(user_id)
        if not ShoppingListRepository(db).delete_by_id_and_user(list_id, user_id):
            raise NotFoundError(f"Shopping list {list_id} not found")
        logger.info(f"Shopping list deleted: {list_id}")
