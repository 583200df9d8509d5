"""
Shopping list models.
"""

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Numeric, Boolean, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class ShoppingList(Base):
    """Shopping lists, optionally generated from a meal plan"""

    __tablename__ = "shopping_list"

    list_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    plan_id = Column(
        Uuid, ForeignKey("meal_plan.plan_id", ondelete="CASCADE"), nullable=True
    )
    name = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("AppUser", back_populates="shopping_lists")
    items = relationship(
        "ShoppingListItem", back_populates="list", cascade="all, delete-orphan"
    )


class ShoppingListItem(Base):
    """Individual items in a shopping list"""

    __tablename__ = "shopping_list_item"

    list_item_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    list_id = Column(
        Uuid,
        ForeignKey("shopping_list.list_id", ondelete="CASCADE"),
        nullable=False,
    )
    product_name = Column(Text, nullable=False)
    quantity = Column(Numeric)
    unit = Column(Text)
    is_purchased = Column(Boolean, default=False, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    list = relationship("ShoppingList", back_populates="items")
