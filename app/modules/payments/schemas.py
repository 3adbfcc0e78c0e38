from pydantic import BaseModel, Field
from typing import Optional, Union
from decimal import Decimal

class PaymentIntentRequest(BaseModel):
    amount_in_cents: int = Field(..., gt=0, description="Monto en unidades menores")
    parcel_id: Optional[Union[int, str]] = Field(None, description="Envío a pagar (informativo)")

class PaymentIntentResponse(BaseModel):
    client_secret: str

class PaymentRecordRequest(BaseModel):
    parcel_id: Union[int, str] = Field(..., description="ID del envío pagado")
    amount: Decimal = Field(..., gt=0)
    payment_method_id: Optional[str] = Field(None, max_length=255)
    transaction_id: str = Field(..., min_length=1, max_length=255, description="ID de la transacción en el procesador")
