"""
Vinculacion de registros recien creados con el usuario logueado.

Tras crear una cuenta/proyecto/update se agrega su ID al field del usuario
en la tabla Users y a la sesion. No hay transaccion: si el PATCH del
usuario falla, el registro ya creado queda en Airtable y el error se propaga.
"""
from __future__ import annotations

from loguru import logger

from app.domain.entities.user_session import UserSession
from app.infrastructure.external.airtable.airtable_gateway import AirtableGateway
from app.shared.constants.kam_constants import (
    USER_ACCOUNTS_FIELD,
    USER_PROJECTS_FIELD,
    USER_UPDATES_FIELD,
)


def _link(gateway: AirtableGateway, session: UserSession, field: str, ids: list[str]) -> None:
    gateway.update_user(session.user_record_id, {field: list(ids)})
    logger.info(f"Usuario {session.user_record_id}: {field} -> {len(ids)} registros")


def link_account(gateway: AirtableGateway, session: UserSession, account_id: str) -> None:
    ids = list(dict.fromkeys([*session.account_ids, account_id]))
    _link(gateway, session, USER_ACCOUNTS_FIELD, ids)
    session.add_account(account_id)


def link_project(gateway: AirtableGateway, session: UserSession, project_id: str) -> None:
    ids = list(dict.fromkeys([*session.project_ids, project_id]))
    _link(gateway, session, USER_PROJECTS_FIELD, ids)
    session.add_project(project_id)


def link_update(gateway: AirtableGateway, session: UserSession, update_id: str) -> None:
    ids = list(dict.fromkeys([*session.update_ids, update_id]))
    _link(gateway, session, USER_UPDATES_FIELD, ids)
    session.add_update(update_id)
