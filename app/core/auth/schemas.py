from pydantic import BaseModel, Field
from typing import Optional

class Principal(BaseModel):
    """Identidad verificada extraída del token"""
    email: str = Field(..., description="Email verificado por el proveedor")
    uid: Optional[str] = Field(None, description="Subject del token")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "email": "merchant@zapshift.com",
                "uid": "k2n8VvE3bXg1"
            }
        }
