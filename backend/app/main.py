from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.database import init_db, close_db
from app.core.exceptions import ShiplogError, error_response
from app.core.logging_config import logger
from app.core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from app.api.v1.router import api_router
from app import models  # noqa: F401  Import models so metadata knows about them


def validate_config() -> bool:
    """Warn about missing configuration; the app still starts and degrades"""
    ok = True
    if not settings.is_database_configured:
        logger.warning("[Startup] DATABASE_URL not set - item store disabled, changelog will report a configuration error")
        ok = False

    if settings.STORAGE_MODE == "s3" and not settings.IMAGE_BUCKET:
        logger.warning("[Startup] STORAGE_MODE=s3 but IMAGE_BUCKET is empty - image uploads will fail")
        ok = False

    if ok:
        logger.info("[Startup] ✓ Configuration validated")
    return ok


async def ensure_database_ready() -> bool:
    """Create tables if they do not exist yet"""
    if not settings.is_database_configured:
        return False
    try:
        await init_db()
        logger.info("[Startup] Database tables ready")
        return True
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"[Startup] Failed to ensure database ready: {e}")
        return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Storage mode: {settings.STORAGE_MODE}")
    logger.info("=" * 60)

    validate_config()
    if not await ensure_database_ready():
        logger.warning("[Startup] Database not ready - item endpoints may fail")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    description="Work item tracker with an auto-generated changelog",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False
)

# Add middleware (order matters - last added runs first)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time", "Content-Disposition"],
)


@app.exception_handler(ShiplogError)
async def shiplog_exception_handler(request: Request, exc: ShiplogError):
    if exc.status_code >= 500:
        logger.error(f"{exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_response(exc))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "message": str(exc) if settings.DEBUG else "An error occurred"
        }
    )


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"/api/{settings.API_VERSION}/health"
    }


app.include_router(api_router, prefix=f"/api/{settings.API_VERSION}")

# Locally stored images are served by the app itself
if settings.STORAGE_MODE == "local":
    app.mount("/uploads", StaticFiles(directory=settings.LOCAL_STORAGE_PATH, check_dir=False), name="uploads")


def run():
    """Console entry point"""
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    run()
