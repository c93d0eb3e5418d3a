from app.services.changelog import ChangelogCounts, ChangelogReport, build_changelog
from app.services.item_store import (
    ItemStore,
    WorkItemRecord,
    StoreResult,
    StoreSuccess,
    StoreFailure,
    StoreFailureReason,
)
from app.services.image_storage import (
    ImageStorage,
    LocalImageStorage,
    S3ImageStorage,
    get_image_storage,
)
