"""
Registro en memoria de sesiones del dashboard.

Reemplaza el almacenamiento clave/valor del navegador: la sesión se abre en
el login, se cierra en el logout y vive en `app.state.session_store`.
"""

from __future__ import annotations

import threading
import uuid
from typing import Any, Dict, Optional

from loguru import logger

from app.domain.entities.user_session import UserSession


class SessionStore:
    """
    Gestor de sesiones por `session_id`.

    Thread-safe: los endpoints síncronos corren en el threadpool de FastAPI.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, UserSession] = {}
        self._lock = threading.Lock()

    def open(self, user_record: Dict[str, Any]) -> UserSession:
        """Crea una sesión nueva para el usuario (login)."""
        session = UserSession.from_user_record(str(uuid.uuid4()), user_record)
        with self._lock:
            self._sessions[session.session_id] = session
        logger.info(f"Sesion abierta para {session.user_name} ({session.user_record_id})")
        return session

    def get(self, session_id: str) -> Optional[UserSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def close(self, session_id: str) -> bool:
        """
        Cierra la sesión (logout).

        Returns:
            True si existía, False si ya estaba cerrada
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        logger.info(f"Sesion cerrada para {session.user_name}")
        return True

    def clear_all(self) -> int:
        with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
