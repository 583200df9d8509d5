"""Pydantic schemas for the recipe library"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class RecipeIngredientCreate(BaseModel):
    """Ingredient line supplied when creating or editing a recipe"""

    ingredient_name: str = Field(..., min_length=1, description="Ingredient name, stored as given")
    quantity: Optional[Decimal] = Field(None, ge=0, description="Amount per recipe")
    unit: Optional[str] = Field(None, description="Free-text unit token, e.g. 'g' or 'cup'")


class RecipeIngredientResponse(BaseModel):
    ingredient_row_id: UUID
    ingredient_name: str
    quantity: Optional[Decimal] = None
    unit: Optional[str] = None

    model_config = {"from_attributes": True}


class RecipeStepCreate(BaseModel):
    step_number: int = Field(..., ge=1)
    instruction: str = Field(..., min_length=1)


class RecipeStepAdd(BaseModel):
    """Step appended to an existing recipe; it is numbered after the last step"""

    instruction: str = Field(..., min_length=1)


class RecipeStepResponse(RecipeStepCreate):
    step_id: UUID

    model_config = {"from_attributes": True}


class RecipeCreate(BaseModel):
    """Request to add a recipe to the user's library"""

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    prep_time: Optional[int] = Field(None, ge=0, description="Minutes")
    cook_time: Optional[int] = Field(None, ge=0, description="Minutes")
    servings: int = Field(default=1, ge=1)
    is_public: bool = False
    ingredients: List[RecipeIngredientCreate] = Field(default_factory=list)
    steps: List[RecipeStepCreate] = Field(default_factory=list)


class RecipeResponse(BaseModel):
    recipe_id: UUID
    user_id: Optional[UUID] = None
    title: str
    description: Optional[str] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    servings: Optional[int] = None
    is_public: bool = False
    created_at: Optional[datetime] = None
    ingredients: List[RecipeIngredientResponse] = []
    steps: List[RecipeStepResponse] = []

    model_config = {"from_attributes": True}
