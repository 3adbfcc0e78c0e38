from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

class RiderCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255, description="Nombre completo")
    phone: Optional[str] = Field(None, max_length=50)
    region: Optional[str] = Field(None, max_length=100)
    district: str = Field(..., min_length=2, max_length=100, description="Distrito donde trabaja")
    bike_brand: Optional[str] = Field(None, max_length=100)
    bike_registration: Optional[str] = Field(None, max_length=100)

    @field_validator('name', 'district')
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError('No puede estar vacío')
        return v.strip()

class RiderStatusUpdate(BaseModel):
    status: str = Field(..., description="pending | active | rejected | deactivated")

class RiderResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    region: Optional[str] = None
    district: str
    bike_brand: Optional[str] = None
    bike_registration: Optional[str] = None
    status: str
    work_status: str
    created_at: datetime

    class Config:
        from_attributes = True
