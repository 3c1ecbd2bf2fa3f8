"""
Casos de uso para autenticación.

Flujo:
- login: clave secreta -> usuario de Airtable -> sesión + token
- logout: cierra la sesión (el token deja de servir)
"""

from __future__ import annotations

from loguru import logger

from app.application.dto.auth_dto import LoginRequestDTO, LoginResponseDTO, SessionDTO
from app.core.security import SecurityService
from app.domain.entities.user_session import UserSession
from app.infrastructure.security.secret_key_auth_service import SecretKeyAuthService
from app.infrastructure.security.session_store import SessionStore
from app.shared.exceptions.auth import InvalidCredentialsException
from app.shared.exceptions.domain import ValidationException


class AuthUseCases:
    def __init__(
        self,
        auth_service: SecretKeyAuthService,
        session_store: SessionStore,
        security: SecurityService,
    ) -> None:
        self._auth_service = auth_service
        self._session_store = session_store
        self._security = security

    def login(self, dto: LoginRequestDTO) -> LoginResponseDTO:
        secret_key = (dto.secret_key or "").strip()
        if not self._auth_service.is_well_formed(secret_key):
            raise ValidationException("La clave secreta debe tener 6 digitos", field="secret_key")

        user = self._auth_service.find_user(secret_key)
        if user is None:
            logger.warning("Login rechazado: clave secreta invalida")
            raise InvalidCredentialsException()

        session = self._session_store.open(user)
        token = self._security.create_access_token(session.session_id)
        return LoginResponseDTO(access_token=token, session=self.snapshot(session))

    def logout(self, session: UserSession) -> bool:
        return self._session_store.close(session.session_id)

    @staticmethod
    def snapshot(session: UserSession) -> SessionDTO:
        return SessionDTO.model_validate(session)
