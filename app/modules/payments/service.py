# app/modules/payments/service.py
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from .repository import PaymentsRepository
from .schemas import PaymentIntentResponse, PaymentRecordRequest
from app.modules.parcels.schemas import PaymentResponse
from app.modules.parcels.service import ParcelLifecycle
from app.shared.services.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


class PaymentsService:
    def __init__(self, db: Session, gateway: Optional[PaymentGateway] = None):
        self.db = db
        self.gateway = gateway
        self.repository = PaymentsRepository(db)
        self.lifecycle = ParcelLifecycle(db)

    async def create_intent(self, amount_in_cents: int) -> PaymentIntentResponse:
        client_secret = await self.gateway.create_intent(amount_in_cents)
        return PaymentIntentResponse(client_secret=client_secret)

    async def record(self, payment_data: PaymentRecordRequest, email: str) -> PaymentResponse:
        return await self.lifecycle.settle(
            parcel_id=payment_data.parcel_id,
            amount=payment_data.amount,
            payment_method_id=payment_data.payment_method_id,
            transaction_id=payment_data.transaction_id,
            email=email
        )

    async def list_payments(self, email: Optional[str]) -> List[PaymentResponse]:
        return [PaymentResponse.model_validate(p) for p in self.repository.list_payments(email)]
