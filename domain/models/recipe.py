"""
Recipe library models.
"""

from sqlalchemy import (
    Column,
    Text,
    TIMESTAMP,
    ForeignKey,
    Numeric,
    Integer,
    Boolean,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class Recipe(Base):
    """A recipe in a user's library (or a public one when user_id is null)"""

    __tablename__ = "recipe"

    recipe_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=True
    )
    title = Column(Text, nullable=False)
    description = Column(Text)
    prep_time = Column(Integer)
    cook_time = Column(Integer)
    servings = Column(Integer, default=1)
    is_public = Column(Boolean, default=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("AppUser", back_populates="recipes")
    ingredients = relationship(
        "RecipeIngredient", back_populates="recipe", cascade="all, delete-orphan"
    )
    steps = relationship(
        "RecipeStep",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeStep.step_number",
    )


class RecipeIngredient(Base):
    """One ingredient line of a recipe; quantity may be null"""

    __tablename__ = "recipe_ingredient"

    ingredient_row_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recipe_id = Column(
        Uuid, ForeignKey("recipe.recipe_id", ondelete="CASCADE"), nullable=False
    )
    ingredient_name = Column(Text, nullable=False)
    quantity = Column(Numeric)
    unit = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    recipe = relationship("Recipe", back_populates="ingredients")


class RecipeStep(Base):
    """Numbered preparation step"""

    __tablename__ = "recipe_step"

    step_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recipe_id = Column(
        Uuid, ForeignKey("recipe.recipe_id", ondelete="CASCADE"), nullable=False
    )
    step_number = Column(Integer, nullable=False)
    instruction = Column(Text, nullable=False)

    recipe = relationship("Recipe", back_populates="steps")
