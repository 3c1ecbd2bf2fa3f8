"""
DTOs relacionados con updates (interacciones con la cuenta).
"""
from datetime import date
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from app.application.dto.record_dto import RecordDTO
from app.shared.constants.kam_constants import UpdateType


class AttachmentDTO(BaseModel):
    """Adjunto por URL publica (Airtable descarga el archivo)."""
    url: str
    filename: Optional[str] = None


class UpdateCreateDTO(BaseModel):
    """Formulario de creacion de update."""
    project_id: str = Field(..., description="Proyecto del update")
    update_type: UpdateType = Field(..., description="Tipo de update")
    notes: str = Field(..., description="Notas")
    update_date: date = Field(..., description="Fecha del update")
    attachments: List[AttachmentDTO] = Field(default_factory=list)

    def to_fields(self, owner_id: Optional[str]) -> Dict[str, Any]:
        """Fields de Airtable para la tabla Updates."""
        fields: Dict[str, Any] = {
            "Notes": self.notes.strip(),
            "Date": self.update_date.isoformat(),
            "Update Type": self.update_type.value,
            "Project": [self.project_id] if self.project_id else [],
            "Update Owner": [owner_id] if owner_id else [],
        }
        if self.attachments:
            fields["Attachments"] = [a.model_dump(exclude_none=True) for a in self.attachments]
        return fields


class UpdateListItemDTO(BaseModel):
    """Update con el nombre de su proyecto resuelto."""
    update: RecordDTO
    project_id: Optional[str] = None
    project_name: str = "N/A"
