from pydantic import BaseModel, Field, field_validator
from typing import Literal, Optional, Union
from decimal import Decimal
from datetime import datetime

class ParcelCreateRequest(BaseModel):
    parcel_type: Literal["document", "non-document"] = Field(..., description="Tipo de envío")
    title: str = Field(..., min_length=1, max_length=255, description="Descripción corta")
    weight: Optional[Decimal] = Field(None, gt=0, description="Peso en kg (no-documentos)")
    cost: Decimal = Field(..., gt=0, description="Costo calculado del envío")

    sender_name: str = Field(..., min_length=1, max_length=255)
    sender_region: Optional[str] = Field(None, max_length=100)
    sender_district: str = Field(..., min_length=1, max_length=100)
    sender_address: Optional[str] = Field(None, max_length=1000)

    receiver_name: str = Field(..., min_length=1, max_length=255)
    receiver_region: Optional[str] = Field(None, max_length=100)
    receiver_district: str = Field(..., min_length=1, max_length=100)
    receiver_address: Optional[str] = Field(None, max_length=1000)

    @field_validator('title', 'sender_name', 'sender_district', 'receiver_name', 'receiver_district')
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError('No puede estar vacío')
        return v.strip()

    class Config:
        json_schema_extra = {
            "example": {
                "parcel_type": "non-document",
                "title": "Laptop charger",
                "weight": 1.5,
                "cost": 150,
                "sender_name": "Rahim",
                "sender_region": "Dhaka",
                "sender_district": "Dhaka",
                "sender_address": "House 12, Road 5, Dhanmondi",
                "receiver_name": "Karim",
                "receiver_region": "Chattogram",
                "receiver_district": "Cumilla",
                "receiver_address": "Kandirpar, Cumilla"
            }
        }

class AssignRiderRequest(BaseModel):
    rider_id: Union[int, str] = Field(..., description="ID del repartidor")
    rider_name: str = Field(..., min_length=1, max_length=255)

class ParcelResponse(BaseModel):
    id: int
    tracking_id: str
    created_by: str
    parcel_type: str
    title: str
    weight: Optional[Decimal] = None
    cost: Decimal
    sender_name: str
    sender_region: Optional[str] = None
    sender_district: str
    sender_address: Optional[str] = None
    receiver_name: str
    receiver_region: Optional[str] = None
    receiver_district: str
    receiver_address: Optional[str] = None
    payment_status: str
    delivery_status: str
    assigned_rider_id: Optional[int] = None
    assigned_rider_name: Optional[str] = None
    assigned_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True

class PaymentResponse(BaseModel):
    id: int
    parcel_id: int
    amount: Decimal
    payment_method_id: Optional[str] = None
    email: str
    transaction_id: str
    paid_at: datetime

    class Config:
        from_attributes = True
