from fastapi import APIRouter
from app.api.v1.endpoints import health, categories, items, changelog

api_router = APIRouter()

# Deep health checks (use /health/ready for load balancers)
api_router.include_router(health.router)


@api_router.get("/health", tags=["Health"])
async def health_check():
    """Simple health check endpoint for load balancer"""
    return {"status": "healthy", "service": "shiplog-backend"}


api_router.include_router(categories.router)
api_router.include_router(items.router)
api_router.include_router(changelog.router)
