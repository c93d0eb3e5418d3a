"""
Category model - user-defined labels that group work items
"""
from sqlalchemy import Column, String, DateTime, Index
from sqlalchemy.orm import relationship
from datetime import datetime

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class Category(Base):
    """A label such as a product area or component. Unrelated to item type."""
    __tablename__ = "categories"

    __table_args__ = (
        Index('ix_categories_created_at', 'created_at'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Deleting a category removes its items
    items = relationship(
        "WorkItem",
        back_populates="category",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Category {self.name}>"
