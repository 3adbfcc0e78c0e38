# app/modules/parcels/__init__.py
"""
Módulo Parcels - Ciclo de vida de los envíos

Estados de entrega: pending -> in_transit -> delivered
Estados de pago: unpaid -> paid

- Alta del envío por el usuario
- Asignación de repartidor (admin)
- Confirmación de entrega (repartidor)
- Liquidación del pago (usada por el módulo de pagos)
- Eliminación del envío

Arquitectura:
- router.py: Endpoints de envíos
- service.py: ParcelLifecycle, transiciones de estado entre colecciones
- repository.py: Acceso a parcels y al ledger de pagos
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import ParcelLifecycle
from .repository import ParcelsRepository

__all__ = [
    "router",
    "ParcelLifecycle",
    "ParcelsRepository"
]
