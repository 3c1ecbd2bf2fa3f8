"""
Endpoints de autenticación.

Login con la clave secreta de 6 dígitos: abre una sesión en el servidor y
devuelve un bearer token para el resto de la API.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.api.v1.dependencies.use_case_deps import get_auth_use_cases, get_current_session
from app.application.dto.auth_dto import (
    LoginRequestDTO,
    LoginResponseDTO,
    LogoutResponseDTO,
    SessionDTO,
)
from app.application.use_cases.auth_use_cases import AuthUseCases
from app.domain.entities.user_session import UserSession


router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Login con clave secreta",
)
def login(
    dto: LoginRequestDTO,
    use_cases: AuthUseCases = Depends(get_auth_use_cases),
) -> LoginResponseDTO:
    return use_cases.login(dto)


@router.post(
    "/logout",
    response_model=LogoutResponseDTO,
    summary="Cerrar la sesion actual",
)
def logout(
    session: UserSession = Depends(get_current_session),
    use_cases: AuthUseCases = Depends(get_auth_use_cases),
) -> LogoutResponseDTO:
    return LogoutResponseDTO(ok=use_cases.logout(session))


@router.get("/me", response_model=SessionDTO, summary="Sesion actual")
def me(session: UserSession = Depends(get_current_session)) -> SessionDTO:
    return AuthUseCases.snapshot(session)
