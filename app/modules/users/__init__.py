# app/modules/users/__init__.py
"""
Módulo Users - Usuarios y roles

- Alta/actualización del usuario en cada login autenticado
- Consulta del rol propio
- Búsqueda de usuarios y cambio de rol (solo admin)
"""

from .router import router
from .service import UsersService
from .repository import UsersRepository

__all__ = [
    "router",
    "UsersService",
    "UsersRepository"
]
