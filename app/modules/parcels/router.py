# app/modules/parcels/router.py
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List, Literal, Optional

from app.config.database import get_db
from app.core.auth.dependencies import (
    get_admin_user, get_current_principal, get_email_scope, get_rider_user, verify_email_match
)
from app.core.auth.schemas import Principal
from app.shared.schemas.common import DeleteResponse, UpdateResponse
from .service import ParcelLifecycle
from .schemas import AssignRiderRequest, ParcelCreateRequest, ParcelResponse

router = APIRouter()

PaymentStatusFilter = Optional[Literal["unpaid", "paid"]]
DeliveryStatusFilter = Optional[Literal["pending", "in_transit", "delivered"]]

@router.post("", response_model=ParcelResponse, status_code=201)
async def create_parcel(
    parcel_data: ParcelCreateRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """
    Crear un envío

    - Queda en estado 'pending' y 'unpaid'
    - created_by es el email del usuario autenticado
    - Se genera el tracking id y el primer evento de seguimiento
    """
    service = ParcelLifecycle(db)
    return await service.create(parcel_data, created_by=principal.email)

@router.get("", response_model=List[ParcelResponse])
async def list_parcels(
    payment_status: PaymentStatusFilter = Query(None),
    delivery_status: DeliveryStatusFilter = Query(None),
    email: Optional[str] = Depends(get_email_scope),
    db: Session = Depends(get_db)
):
    """
    Listar envíos, más recientes primero

    - Con email: solo los envíos del usuario autenticado
    - Sin email: todos los envíos (solo admin)
    """
    service = ParcelLifecycle(db)
    return await service.list_parcels(email, payment_status, delivery_status)

@router.get("/rider", response_model=List[ParcelResponse])
async def list_rider_parcels(
    delivery_status: DeliveryStatusFilter = Query(None),
    principal: Principal = Depends(verify_email_match),
    current_user = Depends(get_rider_user),
    db: Session = Depends(get_db)
):
    """Envíos asignados al repartidor autenticado"""
    service = ParcelLifecycle(db)
    return await service.list_rider_parcels(current_user.email, delivery_status)

@router.get("/{parcel_id}", response_model=ParcelResponse)
async def get_parcel(
    parcel_id: str = Path(..., description="ID del envío"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    service = ParcelLifecycle(db)
    return await service.get_parcel(parcel_id)

@router.patch("/{parcel_id}/assign", response_model=UpdateResponse)
async def assign_rider(
    assignment: AssignRiderRequest,
    parcel_id: str = Path(..., description="ID del envío"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Asignar un repartidor (solo admin)

    - Envío: pending -> in_transit con los datos del repartidor
    - Repartidor: available -> in_delivery
    """
    service = ParcelLifecycle(db)
    modified = await service.assign(
        parcel_id, assignment.rider_id, assignment.rider_name, assigned_by=current_user.email
    )
    return UpdateResponse(success=True, message="Repartidor asignado", modified_count=modified)

@router.patch("/{parcel_id}/deliver", response_model=UpdateResponse)
async def confirm_delivery(
    parcel_id: str = Path(..., description="ID del envío"),
    current_user = Depends(get_rider_user),
    db: Session = Depends(get_db)
):
    """Confirmar la entrega; el repartidor queda disponible otra vez"""
    service = ParcelLifecycle(db)
    modified = await service.deliver(parcel_id, current_user)
    return UpdateResponse(success=True, message="Entrega confirmada", modified_count=modified)

@router.delete("/{parcel_id}", response_model=DeleteResponse)
async def delete_parcel(
    parcel_id: str = Path(..., description="ID del envío"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """Eliminar un envío; sus pagos y eventos de seguimiento se conservan"""
    service = ParcelLifecycle(db)
    deleted = await service.delete(parcel_id)
    return DeleteResponse(success=True, message="Envío eliminado", deleted_count=deleted)
