"""
Health Check Endpoints

- /health/live  - Basic liveness (app is running)
- /health/ready - Readiness check (item store reachable and tables present)
"""

from fastapi import APIRouter, Depends, HTTPException, status
from datetime import datetime, timezone
from typing import Dict, Any, Optional
import time

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.logging_config import logger


router = APIRouter(prefix="/health", tags=["Health Checks"])


async def check_database(db: Optional[AsyncSession]) -> Dict[str, Any]:
    """Check database connectivity and that the items table exists"""
    if db is None:
        return {
            "status": "unhealthy",
            "connection": "not_configured",
            "tables_ready": False,
            "message": "DATABASE_URL is not set"
        }

    start = time.perf_counter()
    try:
        await db.execute(text("SELECT 1"))
        try:
            await db.execute(text("SELECT 1 FROM items LIMIT 1"))
            tables_ok = True
        except SQLAlchemyError:
            await db.rollback()
            tables_ok = False

        return {
            "status": "healthy",
            "latency_ms": round((time.perf_counter() - start) * 1000, 2),
            "connection": "ok",
            "tables_ready": tables_ok,
            "message": "Database connection successful"
        }
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return {
            "status": "unhealthy",
            "latency_ms": round((time.perf_counter() - start) * 1000, 2),
            "connection": "failed",
            "tables_ready": False,
            "error": str(e),
            "message": "Database connection failed"
        }


@router.get("/live")
async def liveness_check():
    """Liveness probe - 200 while the process is up"""
    return {
        "status": "alive",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "app": settings.APP_NAME,
        "version": "1.0.0"
    }


@router.get("/ready")
async def readiness_check(db: Optional[AsyncSession] = Depends(get_db)):
    """
    Readiness probe - 200 only when the item store can be queried.

    Load balancers should use this endpoint rather than /health.
    """
    db_check = await check_database(db)
    is_ready = db_check.get("status") == "healthy" and db_check.get("tables_ready", False)

    response = {
        "status": "ready" if is_ready else "not_ready",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {"database": db_check}
    }

    if not is_ready:
        logger.warning(f"[HealthCheck] Readiness check failed: {response}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=response
        )

    return response
