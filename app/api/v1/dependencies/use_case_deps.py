"""
Dependencias para inyeccion de casos de uso y de la sesion actual.
"""
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.use_cases.account_use_cases import AccountUseCases
from app.application.use_cases.auth_use_cases import AuthUseCases
from app.application.use_cases.project_use_cases import ProjectUseCases
from app.application.use_cases.update_use_cases import UpdateUseCases
from app.core.config import settings
from app.core.security import SecurityService, security_service
from app.domain.entities.user_session import UserSession
from app.infrastructure.external.airtable.airtable_gateway import AirtableGateway
from app.infrastructure.security.secret_key_auth_service import SecretKeyAuthService
from app.infrastructure.security.session_store import SessionStore
from app.shared.exceptions.auth import UnauthorizedException


bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_airtable_gateway() -> AirtableGateway:
    """
    Dependencia para obtener el gateway de Airtable.
    Se crea una sola vez para reutilizar la sesion HTTP.

    Returns:
        AirtableGateway: Gateway configurado desde settings
    """
    return AirtableGateway.from_settings(settings)


def get_security_service() -> SecurityService:
    return security_service


def get_session_store(request: Request) -> SessionStore:
    """
    Dependencia para obtener el registro de sesiones de la aplicacion.

    Returns:
        SessionStore: Registro creado en create_application
    """
    return request.app.state.session_store


def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    store: SessionStore = Depends(get_session_store),
    security: SecurityService = Depends(get_security_service),
) -> UserSession:
    """
    Resuelve la sesion del usuario a partir del bearer token.

    Raises:
        UnauthorizedException: Sin token o con la sesion cerrada
        InvalidCredentialsException / TokenExpiredException: Token invalido
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Falta el token de sesion")

    session_id = security.session_id_from_token(credentials.credentials)
    session = store.get(session_id)
    if session is None:
        raise UnauthorizedException("Sesion cerrada o inexistente")
    return session


def get_auth_use_cases(
    gateway: AirtableGateway = Depends(get_airtable_gateway),
    store: SessionStore = Depends(get_session_store),
    security: SecurityService = Depends(get_security_service),
) -> AuthUseCases:
    """
    Dependencia para obtener los casos de uso de autenticacion.

    Returns:
        AuthUseCases: Instancia de casos de uso de autenticacion
    """
    return AuthUseCases(SecretKeyAuthService(gateway), store, security)


def get_account_use_cases(
    gateway: AirtableGateway = Depends(get_airtable_gateway),
) -> AccountUseCases:
    """
    Dependencia para obtener los casos de uso de cuentas.

    Returns:
        AccountUseCases: Instancia de casos de uso de cuentas
    """
    return AccountUseCases(gateway)


def get_project_use_cases(
    gateway: AirtableGateway = Depends(get_airtable_gateway),
) -> ProjectUseCases:
    return ProjectUseCases(gateway)


def get_update_use_cases(
    gateway: AirtableGateway = Depends(get_airtable_gateway),
) -> UpdateUseCases:
    return UpdateUseCases(gateway)
