"""
Endpoints de cuentas (Accounts).
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.v1.dependencies.use_case_deps import get_account_use_cases, get_current_session
from app.application.dto.account_dto import AccountCreateDTO, AccountDetailDTO
from app.application.dto.record_dto import RecordDTO
from app.application.use_cases.account_use_cases import AccountUseCases
from app.domain.entities.user_session import UserSession

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.get("/", response_model=List[RecordDTO])
def list_accounts(
    search: Optional[str] = Query(None, description="Texto en nombre o tipo"),
    account_type: Optional[str] = Query(None, description="Tipo de cuenta exacto"),
    session: UserSession = Depends(get_current_session),
    use_cases: AccountUseCases = Depends(get_account_use_cases),
):
    """
    Cuentas del usuario, con busqueda y filtro por tipo.
    """
    return use_cases.list_accounts(session, search=search, account_type=account_type)


@router.get("/types", response_model=List[str])
def list_account_types(
    session: UserSession = Depends(get_current_session),
    use_cases: AccountUseCases = Depends(get_account_use_cases),
):
    """
    Tipos de cuenta presentes (opciones del filtro).
    """
    return use_cases.list_account_types(session)


@router.get("/{account_id}", response_model=AccountDetailDTO)
def get_account(
    account_id: str,
    session: UserSession = Depends(get_current_session),
    use_cases: AccountUseCases = Depends(get_account_use_cases),
):
    """
    Obtener una cuenta por Airtable Record ID, con sus proyectos.
    """
    return use_cases.get_account(account_id)


@router.post("/", response_model=RecordDTO, status_code=status.HTTP_201_CREATED)
def create_account(
    dto: AccountCreateDTO,
    session: UserSession = Depends(get_current_session),
    use_cases: AccountUseCases = Depends(get_account_use_cases),
):
    """
    Crear una cuenta a nombre del usuario actual.
    """
    return use_cases.create_account(session, dto)
