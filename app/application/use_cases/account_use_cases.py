"""
Casos de uso relacionados con cuentas.
Listado con busqueda, detalle con proyectos y alta vinculada al usuario.
"""
from typing import List, Optional
from loguru import logger

from app.application.dto.account_dto import AccountCreateDTO, AccountDetailDTO
from app.application.dto.record_dto import RecordDTO
from app.application.services.record_filters import distinct_account_types, filter_accounts
from app.application.use_cases.user_links import link_account
from app.domain.entities.user_session import UserSession
from app.infrastructure.external.airtable.airtable_gateway import AirtableGateway
from app.shared.exceptions.domain import ValidationException


class AccountUseCases:
    """
    Casos de uso para gestion de cuentas del usuario.
    """

    def __init__(self, gateway: AirtableGateway):
        self.gateway = gateway

    def list_accounts(
        self,
        session: UserSession,
        search: Optional[str] = None,
        account_type: Optional[str] = None,
    ) -> List[RecordDTO]:
        """
        Obtiene las cuentas del usuario filtradas por busqueda y tipo.

        Args:
            session: Sesion del usuario
            search: Texto a buscar en nombre o tipo
            account_type: Tipo exacto

        Returns:
            List[RecordDTO]: Cuentas que cumplen los filtros
        """
        accounts = self.gateway.fetch_accounts(session.account_ids)
        filtered = filter_accounts(accounts, search=search, account_type=account_type)
        return [RecordDTO.model_validate(a) for a in filtered]

    def list_account_types(self, session: UserSession) -> List[str]:
        """Tipos presentes en las cuentas del usuario (para el filtro)."""
        return distinct_account_types(self.gateway.fetch_accounts(session.account_ids))

    def get_account(self, account_id: str) -> AccountDetailDTO:
        """
        Obtiene una cuenta con sus proyectos.

        Raises:
            EntityNotFoundException: Si la cuenta no existe
        """
        account = self.gateway.fetch_account(account_id)
        project_ids = (account.get("fields") or {}).get("Projects") or []
        projects = self.gateway.fetch_projects(project_ids)
        return AccountDetailDTO(
            account=RecordDTO.model_validate(account),
            projects=[RecordDTO.model_validate(p) for p in projects],
        )

    def create_account(self, session: UserSession, dto: AccountCreateDTO) -> RecordDTO:
        """
        Crea la cuenta y la agrega a las cuentas del usuario.
        """
        if not dto.account_name.strip():
            raise ValidationException("El nombre de la cuenta es obligatorio", field="account_name")

        account = self.gateway.create_account(dto.to_fields(session.user_record_id))
        logger.info(f"Cuenta creada: {account.get('id')} por {session.user_name}")

        if account.get("id"):
            link_account(self.gateway, session, account["id"])
        return RecordDTO.model_validate(account)
