"""
Item Store - persistence access for work items and categories

The store is built per request around an AsyncSession (see
`app.api.deps.get_item_store`). CRUD methods raise ShiplogError subclasses.
The changelog query instead returns an explicit StoreResult so the
changelog endpoint can degrade to a sentinel without catching exceptions.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple, Union
import enum
import time

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import (
    CategoryNotFoundError,
    IncompleteDataError,
    InvalidItemTypeError,
    InvalidStatusError,
    ItemNotFoundError,
    StoreNotConfiguredError,
    ValidationError,
)
from app.core.logging_config import logger
from app.models.category import Category
from app.models.work_item import ItemStatus, ItemType, WorkItem

ITEM_TYPES = [t.value for t in ItemType]
ITEM_STATUSES = [s.value for s in ItemStatus]


@dataclass(frozen=True)
class WorkItemRecord:
    """Detached snapshot of a work item, category name resolved"""
    id: str
    title: str
    type: str
    status: str
    category_id: str
    created_at: datetime
    category_name: Optional[str] = None
    image_url: Optional[str] = None

    @classmethod
    def from_model(cls, item: WorkItem, category_name: Optional[str] = None) -> "WorkItemRecord":
        if category_name is None and item.category is not None:
            category_name = item.category.name
        return cls(
            id=str(item.id),
            title=item.title or "",
            type=item.type,
            status=item.status,
            category_id=str(item.category_id),
            created_at=item.created_at,
            category_name=category_name,
            image_url=item.image_url,
        )


class StoreFailureReason(str, enum.Enum):
    CONFIGURATION = "configuration"
    QUERY = "query"


@dataclass(frozen=True)
class StoreSuccess:
    items: Tuple[WorkItemRecord, ...]


@dataclass(frozen=True)
class StoreFailure:
    reason: StoreFailureReason
    message: str = ""


StoreResult = Union[StoreSuccess, StoreFailure]


def validate_new_item(title: Optional[str], category_id: Optional[str], item_type: Optional[str]) -> None:
    """Reject incomplete or mistyped item submissions before any upload happens"""
    missing = [
        name for name, value in (("title", title), ("category_id", category_id), ("type", item_type))
        if not value or not value.strip()
    ]
    if missing:
        raise IncompleteDataError(missing)
    if item_type not in ITEM_TYPES:
        raise InvalidItemTypeError(item_type, ITEM_TYPES)


class ItemStore:
    """Queries and mutations over items and categories for one session"""

    def __init__(self, session: Optional[AsyncSession]):
        self._session = session

    def _db(self) -> AsyncSession:
        if self._session is None:
            raise StoreNotConfiguredError()
        return self._session

    # ==================== CHANGELOG ====================

    async def fetch_done_items(self) -> StoreResult:
        """Done items, newest first. Never raises."""
        if self._session is None:
            return StoreFailure(StoreFailureReason.CONFIGURATION, "DATABASE_URL is not set")

        start = time.perf_counter()
        try:
            result = await self._session.execute(
                select(WorkItem)
                .options(selectinload(WorkItem.category))
                .execution_options(populate_existing=True)
                .where(WorkItem.status == ItemStatus.DONE.value)
                .order_by(WorkItem.created_at.desc())
            )
            rows = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            logger.log_error_with_context(e, "fetch_done_items")
            await self._session.rollback()
            return StoreFailure(StoreFailureReason.QUERY, str(e))

        logger.log_db_query("select", "items", (time.perf_counter() - start) * 1000, len(rows))
        return StoreSuccess(tuple(WorkItemRecord.from_model(row) for row in rows))

    # ==================== ITEMS ====================

    async def _get_item_model(self, item_id: str) -> WorkItem:
        result = await self._db().execute(
            select(WorkItem)
            .options(selectinload(WorkItem.category))
            .execution_options(populate_existing=True)
            .where(WorkItem.id == item_id)
        )
        item = result.scalar_one_or_none()
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    async def list_items(self, item_type: Optional[str] = None) -> List[WorkItemRecord]:
        """All items newest first, optionally filtered by exact type"""
        query = (
            select(WorkItem)
            .options(selectinload(WorkItem.category))
            .execution_options(populate_existing=True)
            .order_by(WorkItem.created_at.desc())
        )
        if item_type:
            query = query.where(WorkItem.type == item_type)

        result = await self._db().execute(query)
        return [WorkItemRecord.from_model(row) for row in result.scalars().all()]

    async def get_item(self, item_id: str) -> WorkItemRecord:
        return WorkItemRecord.from_model(await self._get_item_model(item_id))

    async def create_item(
        self,
        title: str,
        category_id: str,
        item_type: str,
        image_url: Optional[str] = None,
    ) -> WorkItemRecord:
        validate_new_item(title, category_id, item_type)
        db = self._db()
        category = await self.get_category(category_id)

        item = WorkItem(
            title=title.strip(),
            category_id=category.id,
            type=item_type,
            status=ItemStatus.PENDING.value,
            image_url=image_url,
        )
        db.add(item)
        await db.commit()

        logger.info(f"Created {item.type} item {item.id} in category {category.name}")
        return WorkItemRecord.from_model(item, category_name=category.name)

    async def update_status(self, item_id: str, status: Optional[str]) -> WorkItemRecord:
        if status not in ITEM_STATUSES:
            raise InvalidStatusError(status, ITEM_STATUSES)

        item = await self._get_item_model(item_id)
        previous = item.status
        item.status = status
        await self._db().commit()

        logger.info(f"Item {item_id} status {previous} -> {status}")
        return WorkItemRecord.from_model(item)

    async def delete_item(self, item_id: str) -> None:
        item = await self._get_item_model(item_id)
        db = self._db()
        await db.delete(item)
        await db.commit()
        logger.info(f"Deleted item {item_id}")

    # ==================== CATEGORIES ====================

    async def list_categories(self) -> List[Category]:
        result = await self._db().execute(
            select(Category).order_by(Category.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_category(self, category_id: str) -> Category:
        result = await self._db().execute(
            select(Category).where(Category.id == category_id)
        )
        category = result.scalar_one_or_none()
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    async def create_category(self, name: Optional[str]) -> Category:
        if not name or not name.strip():
            raise ValidationError("Category name is required", field="name")

        db = self._db()
        category = Category(name=name.strip())
        db.add(category)
        await db.commit()

        logger.info(f"Created category {category.name}")
        return category

    async def delete_category(self, category_id: str) -> None:
        """Delete a category together with its items"""
        db = self._db()
        result = await db.execute(
            select(Category)
            .options(selectinload(Category.items))
            .execution_options(populate_existing=True)
            .where(Category.id == category_id)
        )
        category = result.scalar_one_or_none()
        if category is None:
            raise CategoryNotFoundError(category_id)

        item_count = len(category.items)
        await db.delete(category)
        await db.commit()
        logger.info(f"Deleted category {category_id} and {item_count} items")
