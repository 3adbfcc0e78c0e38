from fastapi import Depends, Query, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Iterable, List, Optional

from app.config.database import get_db
from app.shared.database.models import User
from app.core.auth.schemas import Principal
from app.core.auth.service import IdentityVerifier
from app.core.errors import Forbidden, Unauthenticated

security = HTTPBearer(auto_error=False)


def get_identity_verifier(request: Request) -> IdentityVerifier:
    """Verificador creado en el arranque y compartido en app.state"""
    return request.app.state.identity_verifier


# Predicados puros de las compuertas
def email_matches(principal: Principal, email: Optional[str]) -> bool:
    """Sin email no hay nada que comparar"""
    if email is None:
        return True
    return email.strip().lower() == principal.email.lower()


def has_role(user: Optional[User], allowed_roles: Iterable[str]) -> bool:
    return user is not None and user.role in allowed_roles


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> Principal:
    """Obtener el principal verificado desde el header Authorization"""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthenticated("Missing or malformed Authorization header")
    return verifier.verify_token(credentials.credentials)


async def verify_email_match(
    email: Optional[str] = Query(None, description="Email del usuario consultado"),
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """El email de la consulta debe ser el del principal"""
    if not email_matches(principal, email):
        raise Forbidden("Email does not match the authenticated user")
    return principal


def require_roles(allowed_roles: List[str]):
    """Factory para crear dependency que requiere roles específicos"""
    def role_checker(
        principal: Principal = Depends(get_current_principal),
        db: Session = Depends(get_db),
    ) -> User:
        user = db.query(User).filter(User.email == principal.email).first()
        if not has_role(user, allowed_roles):
            role = user.role if user is not None else None
            raise Forbidden(
                f"Role '{role}' not authorized. Allowed roles: {allowed_roles}"
            )
        return user
    return role_checker


async def get_email_scope(
    email: Optional[str] = Query(None, description="Email del usuario consultado"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> Optional[str]:
    """Filtro de email para listados: el propio email, o sin filtro solo para admin"""
    if email is not None:
        if not email_matches(principal, email):
            raise Forbidden("Email does not match the authenticated user")
        return principal.email
    user = db.query(User).filter(User.email == principal.email).first()
    if not has_role(user, ["admin"]):
        raise Forbidden("Only admins can list without an email filter")
    return None


def get_admin_user(current_user: User = Depends(require_roles(["admin"]))) -> User:
    """Dependency para administradores"""
    return current_user


def get_rider_user(current_user: User = Depends(require_roles(["rider", "admin"]))) -> User:
    """Dependency para repartidores"""
    return current_user
