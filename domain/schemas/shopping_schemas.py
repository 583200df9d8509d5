"""Pydantic schemas for shopping list operations."""

from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from uuid import UUID
from datetime import date, datetime
from decimal import Decimal


class GenerateShoppingListRequest(BaseModel):
    """Date range of a meal plan to turn into a shopping list."""
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class GenerateShoppingListResponse(BaseModel):
    """Summary of a generated shopping list."""
    list_id: UUID
    item_count: int


class ShoppingListItemCreate(BaseModel):
    """Item added to a list by hand."""
    product_name: str = Field(..., min_length=1)
    quantity: Optional[Decimal] = Field(None, ge=0)
    unit: Optional[str] = None


class ShoppingListItemResponse(BaseModel):
    """Individual item in a shopping list."""
    list_item_id: UUID
    list_id: UUID
    product_name: str
    quantity: Optional[Decimal] = None
    unit: Optional[str] = None
    is_purchased: bool = False

    model_config = {"from_attributes": True}


class ShoppingListResponse(BaseModel):
    """Complete shopping list with items."""
    list_id: UUID
    user_id: UUID
    plan_id: Optional[UUID] = None
    name: str
    created_at: Optional[datetime] = None
    items: List[ShoppingListItemResponse] = []

    model_config = {"from_attributes": True}


class ShoppingListItemUpdate(BaseModel):
    """Update a shopping list item"""
    is_purchased: bool
