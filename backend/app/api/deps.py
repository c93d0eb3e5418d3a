"""
Shared FastAPI dependencies
"""
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.services.item_store import ItemStore


async def get_item_store(db: Optional[AsyncSession] = Depends(get_db)) -> ItemStore:
    """Item store bound to this request's session (None when DATABASE_URL is unset)"""
    return ItemStore(db)
