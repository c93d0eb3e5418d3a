"""
Work Item API Endpoints

Endpoints:
- GET /items          - List items newest first, optional ?type= filter
- POST /items         - Create an item (multipart form, optional image)
- PATCH /items/{id}   - Change an item's status
- DELETE /items/{id}  - Delete an item
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from app.api.deps import get_item_store
from app.core.config import settings
from app.core.exceptions import UploadTooLargeError
from app.schemas.work_item import (
    ItemStatusUpdate,
    ItemResponse,
    ItemEnvelope,
    ItemListEnvelope,
    MessageResponse,
)
from app.services.image_storage import ImageStorage, build_object_key, get_image_storage
from app.services.item_store import ItemStore, WorkItemRecord, validate_new_item

router = APIRouter(prefix="/items", tags=["Items"])


def _to_response(record: WorkItemRecord) -> ItemResponse:
    return ItemResponse.model_validate(record, from_attributes=True)


@router.get("", response_model=ItemListEnvelope)
async def list_items(
    item_type: Optional[str] = Query(None, alias="type", description="Exact item type filter"),
    store: ItemStore = Depends(get_item_store)
):
    records = await store.list_items(item_type)
    return ItemListEnvelope(data=[_to_response(r) for r in records])


@router.post("", response_model=ItemEnvelope, status_code=status.HTTP_201_CREATED)
async def create_item(
    title: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    item_type: Optional[str] = Form(None, alias="type"),
    image: Optional[UploadFile] = File(None),
    store: ItemStore = Depends(get_item_store),
    image_storage: ImageStorage = Depends(get_image_storage),
):
    """
    Create a work item in `pending` status.

    The form is validated and the category looked up before the image is
    uploaded, so a rejected request never leaves an orphaned object behind.
    Empty image fields are ignored.
    """
    validate_new_item(title, category_id, item_type)
    await store.get_category(category_id)

    image_url = None
    if image is not None:
        data = await image.read()
        if data:
            if len(data) > settings.MAX_UPLOAD_SIZE:
                raise UploadTooLargeError(len(data), settings.MAX_UPLOAD_SIZE)
            key = build_object_key(image.filename)
            image_url = await image_storage.upload(key, data, image.content_type)

    record = await store.create_item(title, category_id, item_type, image_url=image_url)
    return ItemEnvelope(data=_to_response(record))


@router.patch("/{item_id}", response_model=ItemEnvelope)
async def update_item_status(
    item_id: str,
    request: ItemStatusUpdate,
    store: ItemStore = Depends(get_item_store)
):
    record = await store.update_status(item_id, request.status)
    return ItemEnvelope(data=_to_response(record))


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_item(
    item_id: str,
    store: ItemStore = Depends(get_item_store)
):
    await store.delete_item(item_id)
    return MessageResponse(message="Item deleted")
