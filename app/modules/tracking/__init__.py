# app/modules/tracking/__init__.py
"""
Módulo Tracking - Bitácora de seguimiento de envíos

Registro de solo inserción de eventos por tracking id:
- Alta manual de eventos
- Historial ordenado por tiempo

Arquitectura:
- router.py: Endpoints de seguimiento
- service.py: Validación y alta de eventos
- repository.py: Acceso a la colección tracking_logs
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import TrackingService
from .repository import TrackingRepository

__all__ = [
    "router",
    "TrackingService",
    "TrackingRepository"
]
