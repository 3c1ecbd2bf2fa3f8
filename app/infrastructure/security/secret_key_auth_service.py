"""
Servicio de autenticación por clave secreta compartida.

Cada usuario del dashboard tiene una clave de 6 dígitos guardada en la
columna `secret_key` de la tabla Users de Airtable.

IMPORTANTE:
- Este servicio solo resuelve clave -> usuario.
- La sesión y el token se gestionan en SessionStore / SecurityService.
"""

from __future__ import annotations

import hmac
import re
from typing import Any, Dict, Optional

from loguru import logger

from app.infrastructure.external.airtable.airtable_gateway import AirtableGateway
from app.shared.constants.kam_constants import SECRET_KEY_PATTERN

_SECRET_KEY_RE = re.compile(SECRET_KEY_PATTERN)


class SecretKeyAuthService:
    """
    Resuelve la clave secreta contra la tabla Users.

    Usa comparación en tiempo constante (hmac.compare_digest) sobre el
    registro devuelto, además del filtro de Airtable.
    """

    def __init__(self, gateway: AirtableGateway) -> None:
        self._gateway = gateway

    @staticmethod
    def is_well_formed(secret_key: str) -> bool:
        return bool(_SECRET_KEY_RE.fullmatch(secret_key or ""))

    def find_user(self, secret_key: str) -> Optional[Dict[str, Any]]:
        if not self.is_well_formed(secret_key):
            return None

        user = self._gateway.fetch_user_by_secret_key(secret_key)
        if user is None:
            return None

        stored = str((user.get("fields") or {}).get("secret_key") or "")
        if not hmac.compare_digest(stored, secret_key):
            logger.warning(f"Usuario {user.get('id')} devuelto por Airtable con clave distinta")
            return None
        return user
