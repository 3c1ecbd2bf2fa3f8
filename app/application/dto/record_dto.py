"""
DTO generico de un registro de Airtable.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class RecordDTO(BaseModel):
    """
    Registro tal como lo devuelve Airtable.
    Los fields se exponen sin transformar (nombres de columna de Airtable).
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="ID del registro de Airtable")
    created_time: Optional[str] = Field(None, alias="createdTime", description="Fecha de creacion en Airtable")
    fields: Dict[str, Any] = Field(default_factory=dict, description="Fields del registro")
