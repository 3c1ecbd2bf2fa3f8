"""
DTOs relacionados con cuentas (Accounts).
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from app.application.dto.record_dto import RecordDTO
from app.shared.constants.kam_constants import AccountType


class AccountCreateDTO(BaseModel):
    """Formulario de creacion de cuenta."""
    account_name: str = Field(..., description="Nombre de la cuenta")
    account_type: AccountType = Field(..., description="Tipo de cuenta")
    account_description: Optional[str] = Field(None, description="Descripcion libre")

    def to_fields(self, owner_id: Optional[str]) -> Dict[str, Any]:
        """Fields de Airtable para la tabla Accounts."""
        return {
            "Account Name": self.account_name.strip(),
            "Account Type": self.account_type.value,
            "Account Description": self.account_description or "",
            "Account Owner": [owner_id] if owner_id else [],
        }


class AccountDetailDTO(BaseModel):
    """Cuenta con sus proyectos."""
    account: RecordDTO
    projects: List[RecordDTO] = Field(default_factory=list)
