# app/modules/tracking/router.py
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import get_current_principal
from app.core.auth.schemas import Principal
from app.shared.schemas.common import InsertResponse
from .service import TrackingService
from .schemas import TrackingLogCreate, TrackingLogResponse

router = APIRouter()

@router.post("", response_model=InsertResponse, status_code=201)
async def append_tracking_log(
    log_data: TrackingLogCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """
    Registrar un evento de seguimiento

    - El autor del evento es el usuario autenticado
    - parcel_id es opcional; si se envía debe ser un id válido
    """
    service = TrackingService(db)
    log_id = await service.append(log_data, updated_by=principal.email)
    return InsertResponse(success=True, message="Evento registrado", inserted_id=log_id)

@router.get("/{tracking_id}", response_model=List[TrackingLogResponse])
async def get_tracking_history(
    tracking_id: str = Path(..., description="Tracking id del envío"),
    db: Session = Depends(get_db)
):
    """Historial público de un envío, del más antiguo al más reciente"""
    service = TrackingService(db)
    return await service.history(tracking_id)
