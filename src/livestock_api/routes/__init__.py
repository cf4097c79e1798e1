"""Route initialization module."""

from fastapi import APIRouter

from livestock_api.routes.animals import router as animals_router
from livestock_api.routes.auth import router as auth_router
from livestock_api.routes.health import router as health_router
from livestock_api.routes.notifications import router as notifications_router
from livestock_api.routes.upload import router as upload_router

# Create main API router
api_router = APIRouter(prefix="/api")

# Include sub-routers
api_router.include_router(auth_router)
api_router.include_router(animals_router)
api_router.include_router(notifications_router)
api_router.include_router(upload_router)

# Health and root live outside the /api prefix
root_router = APIRouter()
root_router.include_router(health_router)


__all__ = ["api_router", "root_router"]
