# app/core/errors.py
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class ZapShiftError(HTTPException):
    """Base de la taxonomía de errores; cada subclase fija status y código"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "error"
    default_detail = "Unexpected error"

    def __init__(
        self,
        detail: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            status_code=type(self).status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )
        self.details = details


class Unauthenticated(ZapShiftError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "unauthenticated"
    default_detail = "Could not validate credentials"

    def __init__(self, detail: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(detail, details, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(ZapShiftError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "forbidden"
    default_detail = "Not enough permissions"


class NotFound(ZapShiftError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "not_found"
    default_detail = "Resource not found"


class InvalidArgument(ZapShiftError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "invalid_argument"
    default_detail = "Invalid argument"


class AlreadyPaid(ZapShiftError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "already_paid"
    default_detail = "Parcel is already paid"


class InvalidTransition(ZapShiftError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "invalid_transition"
    default_detail = "Invalid state transition"


class GatewayError(ZapShiftError):
    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "gateway_error"
    default_detail = "Payment processor error"


class StoreError(ZapShiftError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "store_error"
    default_detail = "Database error"


def _error_response(exc: ZapShiftError) -> JSONResponse:
    body = ErrorResponse(
        message=str(exc.detail),
        error_code=exc.error_code,
        details=exc.details,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json"),
        headers=exc.headers,
    )


def register_exception_handlers(app: FastAPI):
    """Convertir errores de dominio y de la base de datos en ErrorResponse"""

    @app.exception_handler(ZapShiftError)
    async def zap_shift_error_handler(request: Request, exc: ZapShiftError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} - {exc.error_code}: {exc.detail}")
        return _error_response(exc)

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Unhandled store error on {request.method} {request.url.path}")
        return _error_response(StoreError())
