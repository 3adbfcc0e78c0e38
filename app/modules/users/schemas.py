from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.shared.schemas.common import BaseResponse

class UserLoginSync(BaseModel):
    """Datos de perfil enviados tras el login en el proveedor"""
    name: Optional[str] = Field(None, max_length=255)
    photo_url: Optional[str] = Field(None, max_length=500)

class UserResponse(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None
    last_log_in: Optional[datetime] = None

    class Config:
        from_attributes = True

class UserSyncResponse(BaseResponse):
    inserted: bool
    user: UserResponse

class RoleResponse(BaseModel):
    email: str
    role: str

class RoleUpdateRequest(BaseModel):
    role: str = Field(..., description="user | admin | rider")
