"""
Helpers por tabla sobre AirtableClient.

Cada metodo es una llamada (o una rafaga de llamadas por ID) a la API de
Airtable; no hay cache ni estado. Los nombres de tabla son configurables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from loguru import logger

from app.core.config import Settings
from app.infrastructure.external.airtable.airtable_client import (
    AirtableApiError,
    AirtableClient,
    AirtableCredentials,
    AirtableRecord,
    build_equals_formula,
)
from app.shared.exceptions.domain import EntityNotFoundException


@dataclass(frozen=True)
class AirtableTables:
    users: str = "Users"
    accounts: str = "Accounts"
    projects: str = "Projects"
    updates: str = "Updates"


class AirtableGateway:
    """
    Acceso a las tablas Users / Accounts / Projects / Updates.
    """

    def __init__(self, client: AirtableClient, tables: Optional[AirtableTables] = None) -> None:
        self.client = client
        self.tables = tables or AirtableTables()

    @classmethod
    def from_settings(cls, config: Settings) -> "AirtableGateway":
        client = AirtableClient(
            AirtableCredentials(token=config.AIRTABLE_PAT, base_id=config.AIRTABLE_BASE_ID),
            base_url=config.AIRTABLE_API_URL,
            timeout_s=config.AIRTABLE_TIMEOUT_S,
            max_retries=config.AIRTABLE_MAX_RETRIES,
        )
        tables = AirtableTables(
            users=config.AIRTABLE_USERS_TABLE,
            accounts=config.AIRTABLE_ACCOUNTS_TABLE,
            projects=config.AIRTABLE_PROJECTS_TABLE,
            updates=config.AIRTABLE_UPDATES_TABLE,
        )
        return cls(client, tables)

    # === Usuarios ===

    def fetch_user_by_secret_key(self, secret_key: str) -> Optional[AirtableRecord]:
        """
        Busca el usuario cuya columna `secret_key` coincide.

        Returns:
            El primer registro que coincide, o None si no hay ninguno.
        """
        records = self.client.list_records(
            self.tables.users,
            formula=build_equals_formula("secret_key", secret_key),
        )
        if not records:
            logger.warning("[Airtable] No hay usuario para la clave secreta recibida")
            return None
        return records[0]

    def update_user(self, user_id: str, fields: dict[str, Any]) -> AirtableRecord:
        return self.client.update_record(self.tables.users, user_id, fields)

    # === Registros por ID ===

    def fetch_account(self, account_id: str) -> AirtableRecord:
        return self._get_or_not_found(self.tables.accounts, "Account", account_id)

    def fetch_project(self, project_id: str) -> AirtableRecord:
        return self._get_or_not_found(self.tables.projects, "Project", project_id)

    def fetch_update(self, update_id: str) -> AirtableRecord:
        return self._get_or_not_found(self.tables.updates, "Update", update_id)

    def fetch_accounts(self, ids: Iterable[str]) -> list[AirtableRecord]:
        return [self.fetch_account(record_id) for record_id in ids or []]

    def fetch_projects(self, ids: Iterable[str]) -> list[AirtableRecord]:
        return [self.fetch_project(record_id) for record_id in ids or []]

    def fetch_updates(self, ids: Iterable[str]) -> list[AirtableRecord]:
        return [self.fetch_update(record_id) for record_id in ids or []]

    # === Updates ===

    def fetch_all_updates(self) -> list[AirtableRecord]:
        return self.client.list_records(self.tables.updates)

    def fetch_project_updates(self, project_id: str) -> list[AirtableRecord]:
        return self.client.list_records(
            self.tables.updates,
            formula=build_equals_formula("Project", project_id),
        )

    # === Creacion ===

    def create_account(self, fields: dict[str, Any]) -> AirtableRecord:
        return self.client.create_record(self.tables.accounts, fields)

    def create_project(self, fields: dict[str, Any]) -> AirtableRecord:
        return self.client.create_record(self.tables.projects, fields)

    def create_update(self, fields: dict[str, Any]) -> AirtableRecord:
        return self.client.create_record(self.tables.updates, fields)

    def _get_or_not_found(self, table: str, entity_name: str, record_id: str) -> AirtableRecord:
        try:
            return self.client.get_record(table, record_id)
        except AirtableApiError as e:
            if e.is_not_found:
                raise EntityNotFoundException(entity_name, record_id) from e
            raise
