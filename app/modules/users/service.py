# app/modules/users/service.py
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from .repository import UsersRepository
from .schemas import UserLoginSync, UserResponse, UserSyncResponse, RoleResponse
from app.core.auth.schemas import Principal
from app.core.errors import InvalidArgument, NotFound
from app.shared.database.models import USER_ROLES
from app.shared.database.store import commit, parse_object_id

logger = logging.getLogger(__name__)


class UsersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = UsersRepository(db)

    async def upsert_on_login(self, principal: Principal, profile: UserLoginSync) -> UserSyncResponse:
        """Crear el usuario en su primer login o refrescar last_log_in"""
        now = datetime.now()
        user = self.repository.get_by_email(principal.email)

        if user is not None:
            self.repository.users.update({"id": user.id}, {"last_log_in": now})
            commit(self.db)
            self.db.refresh(user)
            return UserSyncResponse(
                success=True,
                message="User already exists",
                inserted=False,
                user=UserResponse.model_validate(user)
            )

        user_id = self.repository.users.insert({
            "email": principal.email,
            "name": profile.name,
            "photo_url": profile.photo_url,
            "role": "user",
            "created_at": now,
            "last_log_in": now
        })
        commit(self.db)
        logger.info(f"New user registered: {principal.email}")

        user = self.repository.users.find_by_id(user_id)
        return UserSyncResponse(
            success=True,
            message="User created",
            inserted=True,
            user=UserResponse.model_validate(user)
        )

    async def get_role(self, email: str) -> RoleResponse:
        user = self.repository.get_by_email(email)
        if user is None:
            raise NotFound(f"User {email} not found")
        return RoleResponse(email=user.email, role=user.role)

    async def search(self, email_fragment: Optional[str]) -> List[UserResponse]:
        if not email_fragment or not email_fragment.strip():
            raise InvalidArgument("Email search term is required")
        users = self.repository.search_by_email(email_fragment.strip())
        return [UserResponse.model_validate(u) for u in users]

    async def update_role(self, user_id: str, role: str) -> int:
        """Cambiar el rol de un usuario (acción de admin)"""
        if role not in USER_ROLES:
            raise InvalidArgument(f"Invalid role '{role}'. Allowed: {list(USER_ROLES)}")

        user = self.repository.users.find_by_id(parse_object_id(user_id, "user_id"))
        modified = self.repository.users.update({"id": user.id}, {"role": role})
        commit(self.db)
        logger.info(f"Role of {user.email} set to '{role}'")
        return modified
