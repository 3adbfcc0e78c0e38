# app/api/v1/router.py
from fastapi import APIRouter
from app.config.settings import settings
from app.modules.users.router import router as users_router
from app.modules.parcels.router import router as parcels_router
from app.modules.riders.router import router as riders_router
from app.modules.payments.router import router as payments_router
from app.modules.tracking.router import router as tracking_router

# Crear router principal de la API v1
api_router = APIRouter()

api_router.include_router(
    users_router,
    prefix="/users",
    tags=["Users"]
)

api_router.include_router(
    parcels_router,
    prefix="/parcels",
    tags=["Parcels"]
)

api_router.include_router(
    riders_router,
    prefix="/riders",
    tags=["Riders"]
)

api_router.include_router(
    payments_router,
    prefix="/payments",
    tags=["Payments"]
)

api_router.include_router(
    tracking_router,
    prefix="/tracking",
    tags=["Tracking"]
)

@api_router.get("/")
async def api_root():
    """Root endpoint de la API"""
    return {
        "message": f"{settings.app_name} v1",
        "version": settings.version,
        "status": "active",
        "docs": "/docs",
        "available_endpoints": {
            "users": "/api/v1/users",
            "parcels": "/api/v1/parcels",
            "riders": "/api/v1/riders",
            "payments": "/api/v1/payments",
            "tracking": "/api/v1/tracking"
        }
    }
