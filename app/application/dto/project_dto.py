"""
DTOs relacionados con proyectos (Projects) y el tablero diario.
"""
from datetime import date
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from app.application.dto.record_dto import RecordDTO
from app.shared.constants.kam_constants import ProjectStatus, UpdateType


class ProjectCreateDTO(BaseModel):
    """Formulario de creacion de proyecto."""
    project_name: str = Field(..., description="Nombre del proyecto")
    project_status: ProjectStatus = Field(ProjectStatus.NEED_ANALYSIS, description="Estado del proyecto")
    start_date: date = Field(..., description="Fecha de inicio")
    end_date: Optional[date] = Field(None, description="Fecha de fin")
    account_id: str = Field("", description="Cuenta a la que pertenece el proyecto")
    project_value: Optional[float] = Field(None, description="Valor del proyecto")
    project_description: Optional[str] = Field(None, description="Descripcion libre")

    def to_fields(self, owner_id: Optional[str]) -> Dict[str, Any]:
        """Fields de Airtable para la tabla Projects."""
        fields: Dict[str, Any] = {
            "Project Name": self.project_name.strip(),
            "Project Status": self.project_status.value,
            "Start Date": self.start_date.isoformat(),
            "Account": [self.account_id] if self.account_id else [],
            "Project Description": self.project_description or "",
            "Project Owner": [owner_id] if owner_id else [],
        }
        if self.end_date is not None:
            fields["End Date"] = self.end_date.isoformat()
        # Airtable rechaza null en campos numericos: se omite
        if self.project_value is not None:
            fields["Project Value"] = self.project_value
        return fields


class ProjectDetailDTO(BaseModel):
    """Proyecto con sus updates."""
    project: RecordDTO
    updates: List[RecordDTO] = Field(default_factory=list)


class QuickUpdateCreateDTO(BaseModel):
    """Update rapido desde el tablero para un proyecto."""
    notes: str = Field(..., description="Notas del update")
    update_type: UpdateType = Field(UpdateType.CALL, description="Tipo de update")
    date: Optional[str] = Field(None, description="Fecha YYYY-MM-DD (default: hoy IST)")


class ProjectBoardItemDTO(BaseModel):
    project: RecordDTO
    update: Optional[RecordDTO] = Field(None, description="Update del dia, si existe")


class ProjectBoardDTO(BaseModel):
    """Tablero: un update (o ninguno) por proyecto para la fecha dada."""
    date: str
    items: List[ProjectBoardItemDTO] = Field(default_factory=list)
