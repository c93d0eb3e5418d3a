# Re-export all models for convenient imports
from app.models.category import Category
from app.models.work_item import WorkItem, ItemType, ItemStatus

__all__ = [
    "Category",
    "WorkItem",
    "ItemType",
    "ItemStatus",
]
