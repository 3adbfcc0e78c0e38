from pydantic import BaseModel, Field, field_validator
from typing import Optional, Union
from datetime import datetime

class TrackingLogCreate(BaseModel):
    tracking_id: str = Field(..., min_length=1, max_length=40, description="Tracking id del envío")
    parcel_id: Optional[Union[int, str]] = Field(None, description="Id del envío (opcional)")
    status: str = Field(..., min_length=1, max_length=50, description="Estado reportado")
    message: Optional[str] = Field(None, max_length=1000)

    @field_validator('tracking_id', 'status')
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError('No puede estar vacío')
        return v.strip()

class TrackingLogResponse(BaseModel):
    id: int
    tracking_id: str
    parcel_id: Optional[int] = None
    status: str
    message: Optional[str] = None
    updated_by: Optional[str] = None
    time: datetime

    class Config:
        from_attributes = True
