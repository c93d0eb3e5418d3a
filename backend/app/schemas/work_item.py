"""
Work Item Schemas - Request/Response models for tracked items
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class ItemStatusUpdate(BaseModel):
    """PATCH body. Unknown values are rejected by the service with 400."""
    status: Optional[str] = Field(None, description="pending, in_progress or done")


class ItemResponse(BaseModel):
    """A work item with its category name already resolved"""
    id: str
    title: str
    type: str
    status: str
    category_id: str
    category_name: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime


class ItemEnvelope(BaseModel):
    data: ItemResponse


class ItemListEnvelope(BaseModel):
    data: List[ItemResponse]


class MessageResponse(BaseModel):
    message: str
