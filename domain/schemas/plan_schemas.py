from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from domain.enums import MealType


class MealPlanCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class MealPlanEntryCreate(BaseModel):
    recipe_id: Optional[UUID] = None
    meal_date: date
    meal_type: MealType
    servings: int = Field(default=1, ge=1)


class MealPlanEntryResponse(BaseModel):
    entry_id: UUID
    plan_id: UUID
    recipe_id: Optional[UUID] = None
    meal_date: date
    meal_type: str
    servings: int

    model_config = {"from_attributes": True}


class MealPlanResponse(BaseModel):
    plan_id: UUID
    user_id: UUID
    name: str
    start_date: date
    end_date: date
    created_at: Optional[datetime] = None
    entries: List[MealPlanEntryResponse] = []

    model_config = {"from_attributes": True}
