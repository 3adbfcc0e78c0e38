# app/modules/riders/router.py
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import get_admin_user, get_current_principal
from app.core.auth.schemas import Principal
from app.shared.schemas.common import InsertResponse, UpdateResponse
from .service import RidersService
from .schemas import RiderCreateRequest, RiderResponse, RiderStatusUpdate

router = APIRouter()

@router.post("", response_model=InsertResponse, status_code=201)
async def register_rider(
    rider_data: RiderCreateRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """Solicitud para ser repartidor; el email es el del usuario autenticado"""
    service = RidersService(db)
    rider_id = await service.register(rider_data, principal.email)
    return InsertResponse(success=True, message="Solicitud registrada", inserted_id=rider_id)

@router.get("/pending", response_model=List[RiderResponse])
async def list_pending_riders(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Solicitudes pendientes de aprobación (solo admin)"""
    service = RidersService(db)
    return await service.list_pending()

@router.get("/active", response_model=List[RiderResponse])
async def list_active_riders(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Repartidores activos (solo admin)"""
    service = RidersService(db)
    return await service.list_active()

@router.get("/available", response_model=List[RiderResponse])
async def list_available_riders(
    district: str = Query(..., description="Distrito"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Repartidores activos y libres en un distrito (solo admin)"""
    service = RidersService(db)
    return await service.list_available(district)

@router.patch("/{rider_id}/status", response_model=UpdateResponse)
async def update_rider_status(
    status_data: RiderStatusUpdate,
    rider_id: str = Path(..., description="ID del repartidor"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Aprobar, rechazar o desactivar un repartidor (solo admin)

    Aprobar también promueve al usuario al rol 'rider'.
    """
    service = RidersService(db)
    modified = await service.update_status(rider_id, status_data.status)
    return UpdateResponse(success=True, message="Estado actualizado", modified_count=modified)
