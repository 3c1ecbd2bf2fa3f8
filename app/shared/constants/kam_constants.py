"""
Constantes del dominio de key accounts.
Opciones validas de los selects de Airtable y nombres de fields.
"""
from enum import Enum


class AccountType(str, Enum):
    """Tipos de cuenta aceptados por la tabla Accounts."""
    CHANNEL_PARTNER = "Channel Partner"
    CLIENT = "Client"
    VENDOR = "Vendor"
    TECHNOLOGY_PARTNER = "Technology Partner"
    INTERNAL_INITIATIVE = "Internal Initiative"


class ProjectStatus(str, Enum):
    """Estados de un proyecto (pipeline comercial)."""
    NEED_ANALYSIS = "Need Analysis"
    NEGOTIATION = "Negotiation"
    CLOSED_WON = "Closed Won"
    CLOSED_LOST = "Closed Lost"


class UpdateType(str, Enum):
    """Canal de la interaccion registrada en un update."""
    CALL = "Call"
    EMAIL = "Email"
    ONLINE_MEETING = "Online Meeting"
    PHYSICAL_MEETING = "Physical Meeting"


# Fields de Airtable usados por el backend
USER_NAME_FIELD = "User Name"
USER_ACCOUNTS_FIELD = "Accounts"
USER_PROJECTS_FIELD = "Projects"
USER_UPDATES_FIELD = "Updates"

UPDATE_PROJECT_FIELD = "Project"
UPDATE_DATE_FIELD = "Date"

# Offset del equipo comercial respecto de UTC (IST, +05:30)
BOARD_UTC_OFFSET_MINUTES = 330

# La clave secreta de login es de 6 digitos
SECRET_KEY_PATTERN = r"^[0-9]{6}$"
