# app/modules/payments/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import get_current_principal, get_email_scope
from app.core.auth.schemas import Principal
from app.modules.parcels.schemas import PaymentResponse
from app.shared.services.payment_gateway import PaymentGateway, get_payment_gateway
from .service import PaymentsService
from .schemas import PaymentIntentRequest, PaymentIntentResponse, PaymentRecordRequest

router = APIRouter()

@router.post("/create-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    intent: PaymentIntentRequest,
    principal: Principal = Depends(get_current_principal),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    db: Session = Depends(get_db)
):
    """Crear el payment intent en el procesador y devolver el client secret"""
    service = PaymentsService(db, gateway)
    return await service.create_intent(intent.amount_in_cents)

@router.post("", response_model=PaymentResponse, status_code=201)
async def record_payment(
    payment_data: PaymentRecordRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """
    Registrar un pago confirmado por el procesador

    - Marca el envío como 'paid'
    - Inserta el registro en el historial de pagos
    - Reintentos con el mismo transaction_id devuelven el mismo pago
    """
    service = PaymentsService(db)
    return await service.record(payment_data, email=principal.email)

@router.get("", response_model=List[PaymentResponse])
async def list_payments(
    email: Optional[str] = Depends(get_email_scope),
    db: Session = Depends(get_db)
):
    """Historial de pagos, más recientes primero"""
    service = PaymentsService(db)
    return await service.list_payments(email)
