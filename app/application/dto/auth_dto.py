"""
DTOs de login, logout y sesion del dashboard.
"""
from datetime import datetime
from typing import List
from pydantic import BaseModel, Field


class LoginRequestDTO(BaseModel):
    """Login con la clave secreta de 6 digitos."""
    secret_key: str = Field(..., description="Clave secreta del usuario (6 digitos)")


class SessionDTO(BaseModel):
    """Snapshot de la sesion del usuario."""
    user_record_id: str = Field(..., description="ID del usuario en la tabla Users")
    user_name: str = Field(..., description="Nombre para mostrar")
    account_ids: List[str] = Field(default_factory=list)
    project_ids: List[str] = Field(default_factory=list)
    update_ids: List[str] = Field(default_factory=list)
    created_at: datetime

    class Config:
        """Configuración de Pydantic."""
        from_attributes = True


class LoginResponseDTO(BaseModel):
    access_token: str
    token_type: str = "bearer"
    session: SessionDTO


class LogoutResponseDTO(BaseModel):
    ok: bool
