"""
Recipe Repository - Data access layer for recipes, their ingredients and steps
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Recipe, RecipeIngredient, RecipeStep


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for recipe data access"""

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    def get_visible(self, recipe_id: UUID, user_id: UUID) -> Optional[Recipe]:
        """Get a recipe the user owns or that is public"""
        return (
            self.db.query(Recipe)
            .filter(
                Recipe.recipe_id == recipe_id,
                or_(Recipe.user_id == user_id, Recipe.is_public.is_(True)),
            )
            .first()
        )

    def get_by_id_and_user(self, recipe_id: UUID, user_id: UUID) -> Optional[Recipe]:
        """Get a recipe owned by the user (authorization check)"""
        return (
            self.db.query(Recipe)
            .filter(Recipe.recipe_id == recipe_id, Recipe.user_id == user_id)
            .first()
        )

    def search(
        self,
        user_id: UUID,
        query: Optional[str] = None,
        public_only: bool = False,
        limit: int = 50,
    ) -> List[Recipe]:
        """
        List recipes visible to a user.

        Args:
            user_id: Requesting user
            query: Case-insensitive substring of the title
            public_only: Only public recipes instead of own + public
            limit: Maximum number of results
        """
        q = self.db.query(Recipe)
        if public_only:
            q = q.filter(Recipe.is_public.is_(True))
        else:
            q = q.filter(or_(Recipe.user_id == user_id, Recipe.is_public.is_(True)))
        if query:
            q = q.filter(Recipe.title.ilike(f"%{query}%"))
        return q.order_by(Recipe.title).limit(limit).all()


class RecipeIngredientRepository(BaseRepository[RecipeIngredient]):
    """Repository for recipe ingredient rows"""

    def __init__(self, db: Session):
        super().__init__(db, RecipeIngredient)

    def get_by_recipe_id(self, recipe_id: UUID) -> List[RecipeIngredient]:
        """Get all ingredient rows of a recipe"""
        return (
            self.db.query(RecipeIngredient)
            .filter(RecipeIngredient.recipe_id == recipe_id)
            .all()
        )


class RecipeStepRepository(BaseRepository[RecipeStep]):
    """Repository for recipe steps"""

    def __init__(self, db: Session):
        super().__init__(db, RecipeStep)

    def get_by_recipe_id(self, recipe_id: UUID) -> List[RecipeStep]:
        """Get the steps of a recipe in step order"""
        return (
            self.db.query(RecipeStep)
            .filter(RecipeStep.recipe_id == recipe_id)
            .order_by(RecipeStep.step_number)
            .all()
        )

    def next_step_number(self, recipe_id: UUID) -> int:
        """Number for a step appended after the last one"""
        last = (
            self.db.query(func.max(RecipeStep.step_number))
            .filter(RecipeStep.recipe_id == recipe_id)
            .scalar()
        )
        return (last or 0) + 1
