"""
Changelog Schemas - wire shape of the rendered changelog
"""

from pydantic import BaseModel, Field
from typing import Optional


class ChangelogStats(BaseModel):
    """Per-section counts, serialized with camelCase keys"""
    bug_fixed: int = Field(0, serialization_alias="bugFixed")
    feature_added: int = Field(0, serialization_alias="featureAdded")
    feature_updated: int = Field(0, serialization_alias="featureUpdated")


class ChangelogResponse(BaseModel):
    data: str = Field(..., description="Rendered changelog text or a sentinel")
    stats: ChangelogStats
    error: Optional[str] = Field(None, description="Set when the store could not be read")
