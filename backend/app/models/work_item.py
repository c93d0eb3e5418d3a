"""
Work item model - bugs, new features and feature updates
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Text, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class ItemType(str, enum.Enum):
    """Kind of work an item tracks"""
    BUG = "bug"
    NEW_FEATURE = "new_feature"
    FEATURE_UPDATE = "feature_update"


class ItemStatus(str, enum.Enum):
    """Item lifecycle. Any transition is allowed, including direct jumps."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class WorkItem(Base):
    """
    A trackable unit of engineering work.

    `type` and `status` are plain strings rather than database enums so rows
    written by older clients with unknown values still load; the API
    validates values on write.
    """
    __tablename__ = "items"

    __table_args__ = (
        Index('ix_items_status', 'status'),
        Index('ix_items_type', 'type'),
        Index('ix_items_created_at', 'created_at'),
        Index('ix_items_category_id', 'category_id'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    category_id = Column(GUID, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)

    title = Column(Text, nullable=False)
    type = Column(String(32), nullable=False)
    status = Column(String(32), default=ItemStatus.PENDING.value, nullable=False)

    # Public URL in object storage, if an image was uploaded
    image_url = Column(String(1000), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    category = relationship("Category", back_populates="items")

    def __repr__(self):
        return f"<WorkItem {self.type}:{self.status} {self.title!r}>"
