"""
Category API Endpoints

Endpoints:
- GET /categories         - List categories, newest first
- POST /categories        - Create a category
- DELETE /categories/{id} - Delete a category and its items
"""

from fastapi import APIRouter, Depends, status

from app.api.deps import get_item_store
from app.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryEnvelope,
    CategoryListEnvelope,
)
from app.schemas.work_item import MessageResponse
from app.services.item_store import ItemStore

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=CategoryListEnvelope)
async def list_categories(store: ItemStore = Depends(get_item_store)):
    categories = await store.list_categories()
    return CategoryListEnvelope(
        data=[CategoryResponse.model_validate(c) for c in categories]
    )


@router.post("", response_model=CategoryEnvelope, status_code=status.HTTP_201_CREATED)
async def create_category(
    request: CategoryCreate,
    store: ItemStore = Depends(get_item_store)
):
    """Create a category. The name is trimmed; blank names are rejected."""
    category = await store.create_category(request.name)
    return CategoryEnvelope(data=CategoryResponse.model_validate(category))


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: str,
    store: ItemStore = Depends(get_item_store)
):
    await store.delete_category(category_id)
    return MessageResponse(message="Category deleted")
