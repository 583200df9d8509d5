"""API routes for shopping list management."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from api.dependencies import get_db, get_current_user_id
from app.config import settings
from domain.schemas.shopping_schemas import (
    ShoppingListItemCreate,
    ShoppingListItemResponse,
    ShoppingListItemUpdate,
    ShoppingListResponse,
)
from services.shopping_service import ShoppingService

router = APIRouter(prefix="/shopping-lists", tags=["Shopping Lists"])
logger = logging.getLogger("smartmeal.api.shopping")


@router.get("", response_model=List[ShoppingListResponse])
def get_user_shopping_lists(
    limit: int = Query(default=settings.page_size, ge=1, le=settings.max_page_size),
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    """
    Get all shopping lists for the current user.

    Returns lists ordered by creation date (newest first).
    """
    lists = ShoppingService.get_user_shopping_lists(db, user_id, limit=limit)
    return [ShoppingListResponse.model_validate(sl) for sl in lists]


@router.get("/{list_id}", response_model=ShoppingListResponse)
def get_shopping_list(
    list_id: UUID,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    """Get a shopping list with its items."""
    return ShoppingListResponse.model_validate(
        ShoppingService.get_shopping_list(db, list_id, user_id)
    )


@router.delete("/{list_id}")
def delete_shopping_list(
    list_id: UUID,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    """
    Delete a shopping list and its items.

    Also the way to clean up a list left behind by a failed generation.
    """
    ShoppingService.delete_shopping_list(db, list_id, user_id)
    return {"status": "ok", "deleted": str(list_id)}


@router.post(
    "/{list_id}/items",
    response_model=ShoppingListItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_item(
    list_id: UUID,
    body: ShoppingListItemCreate,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    """Add an item by hand."""
    item = ShoppingService.add_item(
        db, list_id, user_id, body.product_name, quantity=body.quantity, unit=body.unit
    )
    return ShoppingListItemResponse.model_validate(item)


@router.patch("/items/{list_item_id}", response_model=ShoppingListItemResponse)
def update_shopping_list_item(
    list_item_id: UUID,
    update: ShoppingListItemUpdate,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    """
    Check an item off (or back on).

    Example request:
    ```json
    {"is_purchased": true}
    ```
    """
    item = ShoppingService.set_item_purchased(db, list_item_id, user_id, update.is_purchased)
    return ShoppingListItemResponse.model_validate(item)


@router.delete("/items/{list_item_id}")
def delete_shopping_list_item(
    list_item_id: UUID,
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
):
    ShoppingService.delete_item(db, list_item_id, user_id)
    return {"status": "ok", "deleted": str(list_item_id)}
