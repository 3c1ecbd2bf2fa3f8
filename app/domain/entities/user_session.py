"""
Entidad de dominio: UserSession (sesion del dashboard).
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from app.shared.constants.kam_constants import (
    USER_ACCOUNTS_FIELD,
    USER_NAME_FIELD,
    USER_PROJECTS_FIELD,
    USER_UPDATES_FIELD,
)


@dataclass
class UserSession:
    """
    Estado de un usuario logueado.

    Cachea los IDs de cuentas, proyectos y updates del usuario tal como
    estaban en Airtable al hacer login; las creaciones posteriores se
    agregan aqui para que los listados las vean sin volver a leer Users.
    """

    session_id: str
    user_record_id: str
    user_name: str = "User"
    account_ids: List[str] = field(default_factory=list)
    project_ids: List[str] = field(default_factory=list)
    update_ids: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validaciones después de la inicialización."""
        if not self.user_record_id:
            raise ValueError("La sesion necesita el ID del usuario")

    @classmethod
    def from_user_record(cls, session_id: str, user: Dict[str, Any]) -> "UserSession":
        """Construye la sesion a partir del registro de la tabla Users."""
        fields = user.get("fields") or {}
        return cls(
            session_id=session_id,
            user_record_id=user["id"],
            user_name=fields.get(USER_NAME_FIELD) or "User",
            account_ids=list(fields.get(USER_ACCOUNTS_FIELD) or []),
            project_ids=list(fields.get(USER_PROJECTS_FIELD) or []),
            update_ids=list(fields.get(USER_UPDATES_FIELD) or []),
        )

    @staticmethod
    def _append_unique(ids: List[str], record_id: str) -> List[str]:
        if record_id not in ids:
            ids.append(record_id)
        return ids

    def add_account(self, account_id: str) -> List[str]:
        return self._append_unique(self.account_ids, account_id)

    def add_project(self, project_id: str) -> List[str]:
        return self._append_unique(self.project_ids, project_id)

    def add_update(self, update_id: str) -> List[str]:
        return self._append_unique(self.update_ids, update_id)
