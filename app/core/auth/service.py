# app/core/auth/service.py
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from jose import jwt, JWTError

from app.config.settings import settings
from app.core.auth.schemas import Principal
from app.core.errors import Unauthenticated

logger = logging.getLogger(__name__)


class IdentityVerifier:
    """Verifica tokens del proveedor de identidad y extrae el principal"""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
        expire_minutes: int = 60,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.audience = audience
        self.issuer = issuer
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls) -> "IdentityVerifier":
        return cls(
            secret_key=settings.identity_secret_key,
            algorithm=settings.identity_algorithm,
            audience=settings.identity_audience,
            issuer=settings.identity_issuer,
            expire_minutes=settings.access_token_expire_minutes,
        )

    def verify_token(self, token: str) -> Principal:
        """Verificar y decodificar token; cualquier fallo -> Unauthenticated"""
        if not token:
            raise Unauthenticated("Missing bearer token")

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_aud": self.audience is not None},
            )
        except JWTError as e:
            logger.info(f"Rejected token: {e}")
            raise Unauthenticated("Invalid or expired token")

        email = payload.get("email")
        if not email:
            raise Unauthenticated("Token has no email claim")

        uid = payload.get("sub") or payload.get("user_id") or payload.get("uid")
        return Principal(email=email, uid=str(uid) if uid is not None else None)

    def issue_token(self, email: str, uid: Optional[str] = None, expires_delta: Optional[timedelta] = None) -> str:
        """Firmar un token con la misma configuración (desarrollo y pruebas)"""
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.expire_minutes))
        to_encode = {"email": email, "sub": uid or email, "exp": expire}
        if self.audience:
            to_encode["aud"] = self.audience
        if self.issuer:
            to_encode["iss"] = self.issuer
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
