"""
Casos de uso relacionados con proyectos.
Incluye el tablero diario: un update por proyecto para una fecha.
"""
from datetime import date
from typing import List, Optional
from loguru import logger

from app.application.dto.project_dto import (
    ProjectBoardDTO,
    ProjectBoardItemDTO,
    ProjectCreateDTO,
    ProjectDetailDTO,
    QuickUpdateCreateDTO,
)
from app.application.dto.record_dto import RecordDTO
from app.application.dto.update_dto import UpdateCreateDTO
from app.application.services.record_filters import filter_projects
from app.application.services.update_aggregator import (
    group_by_project,
    select_for_date,
    today_ist,
)
from app.application.use_cases.update_use_cases import UpdateUseCases
from app.application.use_cases.user_links import link_project
from app.domain.entities.user_session import UserSession
from app.infrastructure.external.airtable.airtable_gateway import AirtableGateway
from app.shared.exceptions.domain import ValidationException


def parse_board_date(value: Optional[str]) -> date:
    """
    Fecha del tablero: YYYY-MM-DD o, si no viene, hoy en IST.

    Raises:
        ValidationException: Si el formato no es valido
    """
    raw = (value or "").strip() or today_ist()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValidationException(f"Fecha invalida: '{value}' (se espera YYYY-MM-DD)", field="date")


class ProjectUseCases:
    """
    Casos de uso para los proyectos del usuario.
    """

    def __init__(self, gateway: AirtableGateway):
        self.gateway = gateway
        self.update_use_cases = UpdateUseCases(gateway)

    def list_projects(
        self,
        session: UserSession,
        search: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[RecordDTO]:
        """
        Proyectos del usuario filtrados por busqueda (nombre/estado) y estado.
        """
        projects = self.gateway.fetch_projects(session.project_ids)
        return [RecordDTO.model_validate(p) for p in filter_projects(projects, search, status)]

    def get_board(
        self,
        session: UserSession,
        board_date: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[str] = None,
    ) -> ProjectBoardDTO:
        """
        Arma el tablero diario.

        Se traen todos los updates, se indexan por proyecto (solo los del
        usuario) y se elige el update de la fecha pedida para cada proyecto.
        """
        target = parse_board_date(board_date).isoformat()

        projects = self.gateway.fetch_projects(session.project_ids)
        all_updates = self.gateway.fetch_all_updates()
        grouped = group_by_project(all_updates, session.project_ids)
        selected = select_for_date(grouped, target)

        items = []
        for project in filter_projects(projects, search, status):
            update = selected.get(project["id"])
            items.append(
                ProjectBoardItemDTO(
                    project=RecordDTO.model_validate(project),
                    update=RecordDTO.model_validate(update) if update else None,
                )
            )
        logger.debug(
            f"Tablero {target}: {len(items)} proyectos, "
            f"{sum(1 for i in items if i.update)} con update"
        )
        return ProjectBoardDTO(date=target, items=items)

    def get_project(self, project_id: str) -> ProjectDetailDTO:
        """
        Proyecto con sus updates.

        Raises:
            EntityNotFoundException: Si el proyecto no existe
        """
        project = self.gateway.fetch_project(project_id)
        update_ids = (project.get("fields") or {}).get("Updates") or []
        updates = self.gateway.fetch_updates(update_ids)
        return ProjectDetailDTO(
            project=RecordDTO.model_validate(project),
            updates=[RecordDTO.model_validate(u) for u in updates],
        )

    def create_project(self, session: UserSession, dto: ProjectCreateDTO) -> RecordDTO:
        """
        Crea el proyecto y lo agrega a los proyectos del usuario.
        """
        if not dto.project_name.strip():
            raise ValidationException("El nombre del proyecto es obligatorio", field="project_name")
        if not dto.account_id:
            raise ValidationException("Selecciona una cuenta", field="account_id")
        if dto.end_date is not None and dto.end_date < dto.start_date:
            raise ValidationException("La fecha de fin es anterior a la de inicio", field="end_date")

        project = self.gateway.create_project(dto.to_fields(session.user_record_id))
        logger.info(f"Proyecto creado: {project.get('id')} en cuenta {dto.account_id}")

        if project.get("id"):
            link_project(self.gateway, session, project["id"])
        return RecordDTO.model_validate(project)

    def create_quick_update(
        self, session: UserSession, project_id: str, dto: QuickUpdateCreateDTO
    ) -> RecordDTO:
        """
        Update rapido desde el tablero (fecha por defecto: hoy IST).
        """
        notes = (dto.notes or "").strip()
        if not notes:
            raise ValidationException("Las notas son obligatorias", field="notes")

        return self.update_use_cases.create_update(
            session,
            UpdateCreateDTO(
                project_id=project_id,
                update_type=dto.update_type,
                notes=notes,
                update_date=parse_board_date(dto.date),
            ),
        )
