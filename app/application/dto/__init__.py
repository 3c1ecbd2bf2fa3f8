"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .record_dto import RecordDTO
from .auth_dto import LoginRequestDTO, LoginResponseDTO, LogoutResponseDTO, SessionDTO
from .account_dto import AccountCreateDTO, AccountDetailDTO
from .project_dto import (
    ProjectCreateDTO,
    ProjectDetailDTO,
    QuickUpdateCreateDTO,
    ProjectBoardItemDTO,
    ProjectBoardDTO,
)
from .update_dto import AttachmentDTO, UpdateCreateDTO, UpdateListItemDTO
from .book_dto import BookDTO

__all__ = [
    "RecordDTO",
    "LoginRequestDTO",
    "LoginResponseDTO",
    "LogoutResponseDTO",
    "SessionDTO",
    "AccountCreateDTO",
    "AccountDetailDTO",
    "ProjectCreateDTO",
    "ProjectDetailDTO",
    "QuickUpdateCreateDTO",
    "ProjectBoardItemDTO",
    "ProjectBoardDTO",
    "AttachmentDTO",
    "UpdateCreateDTO",
    "UpdateListItemDTO",
    "BookDTO",
]
