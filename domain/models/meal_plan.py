"""
Meal planning models.
"""

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Integer, Date, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class MealPlan(Base):
    """A user's meal plan over an inclusive date range"""

    __tablename__ = "meal_plan"

    plan_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    name = Column(Text, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    user = relationship("AppUser", back_populates="meal_plans")
    entries = relationship(
        "MealPlanEntry",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="MealPlanEntry.meal_date",
    )


class MealPlanEntry(Base):
    """A planned meal occupying one (date, meal type) slot"""

    __tablename__ = "meal_plan_entry"

    entry_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    plan_id = Column(
        Uuid, ForeignKey("meal_plan.plan_id", ondelete="CASCADE"), nullable=False
    )
    recipe_id = Column(
        Uuid, ForeignKey("recipe.recipe_id", ondelete="SET NULL"), nullable=True
    )
    meal_date = Column(Date, nullable=False)
    meal_type = Column(Text, nullable=False)  # breakfast, lunch, dinner, snack
    servings = Column(Integer, default=1, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    plan = relationship("MealPlan", back_populates="entries")
