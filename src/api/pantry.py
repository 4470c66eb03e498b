"""Pantry API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import get_current_user_id, get_pantry_service
from src.schemas.pantry import PantryItem, PantryItemCreate, PantryItemPage, PantryItemUpdate
from src.services.pantry_service import PantryService

router = APIRouter(prefix="/api/v1/pantry", tags=["pantry"])


@router.get("", response_model=PantryItemPage)
def list_pantry_items(
    user_id: Annotated[str, Depends(get_current_user_id)],
    pantry_service: Annotated[PantryService, Depends(get_pantry_service)],
    item_type: Annotated[str | None, Query(alias="type")] = None,
    location: str | None = None,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
    last_evaluated_key: Annotated[str | None, Query(alias="lastEvaluatedKey")] = None,
):
    """List one page of the user's pantry.

    Unknown ``type`` or ``location`` values are ignored rather than rejected.
    Pass the returned ``lastEvaluatedKey`` back to fetch the next page.
    """
    return pantry_service.list_items(
        user_id,
        item_type=item_type,
        location=location,
        limit=limit,
        continuation_token=last_evaluated_key,
    )


@router.post("", response_model=PantryItem, status_code=status.HTTP_201_CREATED)
def create_pantry_item(
    item_data: PantryItemCreate,
    user_id: Annotated[str, Depends(get_current_user_id)],
    pantry_service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Add an item to the pantry."""
    return pantry_service.create_item(user_id, item_data)


@router.get("/{item_id}", response_model=PantryItem)
def get_pantry_item(
    item_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    pantry_service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Get a specific pantry item."""
    return pantry_service.get_item(user_id, item_id)


@router.put("/{item_id}", response_model=PantryItem)
def update_pantry_item(
    item_id: str,
    item_data: PantryItemUpdate,
    user_id: Annotated[str, Depends(get_current_user_id)],
    pantry_service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Update a pantry item."""
    return pantry_service.update_item(user_id, item_id, item_data)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pantry_item(
    item_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    pantry_service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Remove an item from the pantry."""
    pantry_service.delete_item(user_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
