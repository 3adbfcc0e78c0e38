# app/modules/riders/__init__.py
"""
Módulo Riders - Repartidores

- Registro del repartidor (queda pendiente de aprobación)
- Listados de pendientes, activos y disponibles por distrito
- Aprobación/rechazo por admin; aprobar promueve el rol del usuario a 'rider'
"""

from .router import router
from .service import RidersService
from .repository import RidersRepository

__all__ = [
    "router",
    "RidersService",
    "RidersRepository"
]
