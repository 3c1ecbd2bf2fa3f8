"""
Entidades del dominio.
"""
from app.domain.entities.user_session import UserSession

__all__ = [
    "UserSession",
]
