# app/modules/users/router.py
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import get_admin_user, get_current_principal, verify_email_match
from app.core.auth.schemas import Principal
from app.shared.schemas.common import UpdateResponse
from .service import UsersService
from .schemas import (
    UserLoginSync, UserResponse, UserSyncResponse, RoleResponse, RoleUpdateRequest
)

router = APIRouter()

@router.post("", response_model=UserSyncResponse)
async def sync_user(
    profile: UserLoginSync = UserLoginSync(),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """
    Sincronizar el usuario tras el login

    - Primer login: crea el usuario con rol 'user'
    - Logins siguientes: actualiza last_log_in
    """
    service = UsersService(db)
    return await service.upsert_on_login(principal, profile)

@router.get("/role", response_model=RoleResponse)
async def get_user_role(
    principal: Principal = Depends(verify_email_match),
    db: Session = Depends(get_db)
):
    """Rol del usuario autenticado"""
    service = UsersService(db)
    return await service.get_role(principal.email)

@router.get("/search", response_model=List[UserResponse])
async def search_users(
    email: Optional[str] = Query(None, description="Fragmento del email"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Buscar usuarios por email (solo admin)"""
    service = UsersService(db)
    return await service.search(email)

@router.patch("/{user_id}/role", response_model=UpdateResponse)
async def update_user_role(
    role_data: RoleUpdateRequest,
    user_id: str = Path(..., description="ID del usuario"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Cambiar el rol de un usuario (solo admin)"""
    service = UsersService(db)
    modified = await service.update_role(user_id, role_data.role)
    return UpdateResponse(success=True, message="Rol actualizado", modified_count=modified)
