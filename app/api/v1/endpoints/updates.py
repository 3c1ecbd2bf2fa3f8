"""
Endpoints de updates.
"""
from typing import List

from fastapi import APIRouter, Depends, status

from app.api.v1.dependencies.use_case_deps import get_current_session, get_update_use_cases
from app.application.dto.record_dto import RecordDTO
from app.application.dto.update_dto import UpdateCreateDTO, UpdateListItemDTO
from app.application.use_cases.update_use_cases import UpdateUseCases
from app.domain.entities.user_session import UserSession

router = APIRouter(prefix="/updates", tags=["Updates"])


@router.get("/", response_model=List[UpdateListItemDTO])
def list_updates(
    session: UserSession = Depends(get_current_session),
    use_cases: UpdateUseCases = Depends(get_update_use_cases),
):
    """
    Updates del usuario con el nombre del proyecto.
    """
    return use_cases.list_updates(session)


@router.get("/{update_id}", response_model=RecordDTO)
def get_update(
    update_id: str,
    session: UserSession = Depends(get_current_session),
    use_cases: UpdateUseCases = Depends(get_update_use_cases),
):
    return use_cases.get_update(update_id)


@router.post("/", response_model=RecordDTO, status_code=status.HTTP_201_CREATED)
def create_update(
    dto: UpdateCreateDTO,
    session: UserSession = Depends(get_current_session),
    use_cases: UpdateUseCases = Depends(get_update_use_cases),
):
    """
    Crear un update a nombre del usuario actual.
    """
    return use_cases.create_update(session, dto)
