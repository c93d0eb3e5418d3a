# Pydantic schemas
from app.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryEnvelope,
    CategoryListEnvelope,
)
from app.schemas.work_item import (
    ItemStatusUpdate,
    ItemResponse,
    ItemEnvelope,
    ItemListEnvelope,
    MessageResponse,
)
from app.schemas.changelog import ChangelogStats, ChangelogResponse
