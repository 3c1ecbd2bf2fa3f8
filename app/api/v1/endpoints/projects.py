"""
Endpoints de proyectos y del tablero diario de updates.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.v1.dependencies.use_case_deps import get_current_session, get_project_use_cases
from app.application.dto.project_dto import (
    ProjectBoardDTO,
    ProjectCreateDTO,
    ProjectDetailDTO,
    QuickUpdateCreateDTO,
)
from app.application.dto.record_dto import RecordDTO
from app.application.use_cases.project_use_cases import ProjectUseCases
from app.domain.entities.user_session import UserSession

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("/", response_model=List[RecordDTO])
def list_projects(
    search: Optional[str] = Query(None, description="Texto en nombre o estado"),
    status_filter: Optional[str] = Query(None, alias="status", description="Estado del proyecto"),
    session: UserSession = Depends(get_current_session),
    use_cases: ProjectUseCases = Depends(get_project_use_cases),
):
    """
    Proyectos del usuario, con busqueda y filtro por estado.
    """
    return use_cases.list_projects(session, search=search, status=status_filter)


@router.get("/board", response_model=ProjectBoardDTO)
def get_board(
    board_date: Optional[str] = Query(None, alias="date", description="YYYY-MM-DD (default: hoy IST)"),
    search: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    session: UserSession = Depends(get_current_session),
    use_cases: ProjectUseCases = Depends(get_project_use_cases),
):
    """
    Tablero diario: para cada proyecto, el update de la fecha indicada.
    """
    return use_cases.get_board(session, board_date=board_date, search=search, status=status_filter)


@router.get("/{project_id}", response_model=ProjectDetailDTO)
def get_project(
    project_id: str,
    session: UserSession = Depends(get_current_session),
    use_cases: ProjectUseCases = Depends(get_project_use_cases),
):
    """
    Obtener un proyecto por Airtable Record ID, con sus updates.
    """
    return use_cases.get_project(project_id)


@router.post("/", response_model=RecordDTO, status_code=status.HTTP_201_CREATED)
def create_project(
    dto: ProjectCreateDTO,
    session: UserSession = Depends(get_current_session),
    use_cases: ProjectUseCases = Depends(get_project_use_cases),
):
    """
    Crear un proyecto a nombre del usuario actual.
    """
    return use_cases.create_project(session, dto)


@router.post("/{project_id}/updates", response_model=RecordDTO, status_code=status.HTTP_201_CREATED)
def create_quick_update(
    project_id: str,
    dto: QuickUpdateCreateDTO,
    session: UserSession = Depends(get_current_session),
    use_cases: ProjectUseCases = Depends(get_project_use_cases),
):
    """
    Registrar el update del dia para un proyecto desde el tablero.
    """
    return use_cases.create_quick_update(session, project_id, dto)
