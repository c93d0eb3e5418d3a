"""
Changelog API Endpoints

Endpoints:
- GET /changelog          - Rendered changelog and per-section counts (JSON)
- GET /changelog/download - Same text as a dated plain-text attachment

Both read fresh store state on every call and forbid HTTP caching, since
any status change can alter the result. Store problems never surface as
5xx here; they degrade to a sentinel text with zero counts.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse

from app.api.deps import get_item_store
from app.core.logging_config import logger
from app.schemas.changelog import ChangelogResponse, ChangelogStats
from app.services.changelog import build_changelog
from app.services.item_store import ItemStore, StoreFailure, StoreFailureReason

router = APIRouter(prefix="/changelog", tags=["Changelog"])

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}

STORE_NOT_CONFIGURED_TEXT = "Changelog store is not configured"
STORE_QUERY_FAILED_TEXT = "Error loading changelog"

_FAILURES = {
    StoreFailureReason.CONFIGURATION: (STORE_NOT_CONFIGURED_TEXT, "STORE_NOT_CONFIGURED"),
    StoreFailureReason.QUERY: (STORE_QUERY_FAILED_TEXT, "STORE_QUERY_FAILED"),
}


async def load_changelog(store: ItemStore) -> ChangelogResponse:
    """Query done items and render them, or fall back to a failure sentinel"""
    result = await store.fetch_done_items()

    if isinstance(result, StoreFailure):
        text, code = _FAILURES[result.reason]
        logger.warning(f"[Changelog] Store unavailable ({result.reason.value}): {result.message}")
        return ChangelogResponse(data=text, stats=ChangelogStats(), error=code)

    report = build_changelog(result.items)
    return ChangelogResponse(
        data=report.text,
        stats=ChangelogStats(
            bug_fixed=report.counts.bug_fixed,
            feature_added=report.counts.feature_added,
            feature_updated=report.counts.feature_updated,
        ),
    )


def download_filename() -> str:
    return f"changelog-{datetime.now(timezone.utc).date().isoformat()}.txt"


@router.get("", response_model=ChangelogResponse)
async def get_changelog(
    response: Response,
    store: ItemStore = Depends(get_item_store)
):
    """
    Changelog of all done items, newest first within each section.

    Returns:
        - data: rendered text, "No changelog yet", or a failure sentinel
        - stats: bugFixed, featureAdded, featureUpdated
        - error: null, STORE_NOT_CONFIGURED or STORE_QUERY_FAILED
    """
    response.headers.update(NO_CACHE_HEADERS)
    return await load_changelog(store)


@router.get("/download", response_class=PlainTextResponse)
async def download_changelog(store: ItemStore = Depends(get_item_store)):
    """Changelog text as changelog-YYYY-MM-DD.txt"""
    changelog = await load_changelog(store)
    return PlainTextResponse(
        changelog.data,
        headers={
            **NO_CACHE_HEADERS,
            "Content-Disposition": f'attachment; filename="{download_filename()}"',
        },
    )
