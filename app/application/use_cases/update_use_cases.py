"""
Casos de uso relacionados con updates.
"""
from typing import List
from loguru import logger

from app.application.dto.record_dto import RecordDTO
from app.application.dto.update_dto import UpdateCreateDTO, UpdateListItemDTO
from app.application.services.record_filters import project_name_index
from app.application.services.update_aggregator import project_ref
from app.application.use_cases.user_links import link_update
from app.domain.entities.user_session import UserSession
from app.infrastructure.external.airtable.airtable_gateway import AirtableGateway
from app.shared.exceptions.domain import ValidationException


class UpdateUseCases:
    """
    Casos de uso para los updates del usuario.
    """

    def __init__(self, gateway: AirtableGateway):
        self.gateway = gateway

    def list_updates(self, session: UserSession) -> List[UpdateListItemDTO]:
        """
        Updates del usuario con el nombre del proyecto resuelto.

        Los proyectos se piden una sola vez (IDs unicos, en orden de aparicion).
        """
        updates = self.gateway.fetch_updates(session.update_ids)
        project_ids = list(dict.fromkeys(pid for pid in map(project_ref, updates) if pid))
        names = project_name_index(self.gateway.fetch_projects(project_ids))

        items = []
        for update in updates:
            project_id = project_ref(update)
            items.append(
                UpdateListItemDTO(
                    update=RecordDTO.model_validate(update),
                    project_id=project_id,
                    project_name=names.get(project_id) or project_id or "N/A",
                )
            )
        return items

    def get_update(self, update_id: str) -> RecordDTO:
        """
        Raises:
            EntityNotFoundException: Si el update no existe
        """
        return RecordDTO.model_validate(self.gateway.fetch_update(update_id))

    def create_update(self, session: UserSession, dto: UpdateCreateDTO) -> RecordDTO:
        """
        Crea el update y lo agrega a los updates del usuario.
        """
        if not dto.notes.strip():
            raise ValidationException("Las notas son obligatorias", field="notes")
        if not dto.project_id:
            raise ValidationException("El proyecto es obligatorio", field="project_id")

        update = self.gateway.create_update(dto.to_fields(session.user_record_id))
        logger.info(
            f"Update creado: {update.get('id')} para proyecto {dto.project_id} ({dto.update_type.value})"
        )

        if update.get("id"):
            link_update(self.gateway, session, update["id"])
        return RecordDTO.model_validate(update)
