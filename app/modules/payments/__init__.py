# app/modules/payments/__init__.py
"""
Módulo Payments - Pagos de envíos

- Creación del payment intent en el procesador
- Registro de la liquidación (marca el envío como pagado)
- Historial de pagos del usuario
"""

from .router import router
from .service import PaymentsService
from .repository import PaymentsRepository

__all__ = [
    "router",
    "PaymentsService",
    "PaymentsRepository"
]
