"""
Category Schemas - Request/Response models for categories
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime


class CategoryCreate(BaseModel):
    """Request to create a category. Blank names are rejected by the service with 400."""
    name: Optional[str] = Field(None, max_length=255, description="Category name")


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    created_at: datetime


class CategoryEnvelope(BaseModel):
    data: CategoryResponse


class CategoryListEnvelope(BaseModel):
    data: List[CategoryResponse]
