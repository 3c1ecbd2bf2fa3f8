"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.
Soporta configuracion dinamica para desarrollo (ENVIRONMENT=development)
y produccion (ENVIRONMENT=production).
"""
import json
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.

    Configuracion de Airtable:
    - AIRTABLE_BASE_ID y AIRTABLE_PAT son obligatorios para el dashboard
    - AIRTABLE_MAX_RETRIES=0 desactiva los reintentos (comportamiento por defecto)

    Configuracion del sidecar de uploads:
    - BOOKS_DATA_FILE: archivo JSON que actua como almacen de libros
    - UPLOADS_DIR: carpeta servida bajo /uploads
    - BOOKS_STORE_LOCKING: serializa el read-modify-write del archivo JSON
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="KAM Dashboard")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # Seguridad (tokens de sesion)
    SECRET_KEY: str = Field(default="change-this-secret-key-in-production")
    ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=720)

    # CORS (acepta lista JSON o "*" para todos los origenes)
    CORS_ORIGINS: str = Field(default="*")

    # Airtable
    AIRTABLE_BASE_ID: str = Field(default="")
    AIRTABLE_PAT: str = Field(default="")
    AIRTABLE_API_URL: str = Field(default="https://api.airtable.com/v0")
    AIRTABLE_TIMEOUT_S: int = Field(default=30)
    AIRTABLE_MAX_RETRIES: int = Field(default=0)
    AIRTABLE_USERS_TABLE: str = Field(default="Users")
    AIRTABLE_ACCOUNTS_TABLE: str = Field(default="Accounts")
    AIRTABLE_PROJECTS_TABLE: str = Field(default="Projects")
    AIRTABLE_UPDATES_TABLE: str = Field(default="Updates")

    # Sidecar de uploads (libros)
    SIDECAR_HOST: str = Field(default="0.0.0.0")
    SIDECAR_PORT: int = Field(default=4003)
    BOOKS_DATA_FILE: str = Field(default="data/books.json")
    UPLOADS_DIR: str = Field(default="uploads")
    # Si esta vacio se usa la URL base del request
    UPLOADS_PUBLIC_BASE_URL: str = Field(default="")
    BOOKS_STORE_LOCKING: bool = Field(default=False)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    @computed_field
    @property
    def is_development(self) -> bool:
        """Indica si el entorno es de desarrollo."""
        return self.ENVIRONMENT.lower() == "development"

    @computed_field
    @property
    def airtable_configured(self) -> bool:
        """Indica si hay credenciales de Airtable."""
        return bool(self.AIRTABLE_BASE_ID and self.AIRTABLE_PAT)

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


def get_cors_origins(cors_string: str) -> List[str]:
    """
    Parsea la configuracion de CORS.
    Acepta "*" para todos los origenes o una lista JSON.
    """
    if cors_string == "*":
        return ["*"]
    try:
        return json.loads(cors_string)
    except json.JSONDecodeError:
        # Si no es JSON valido, retornar como lista simple
        return [origin.strip() for origin in cors_string.split(",")]


# Instancia global de configuracion
settings = Settings()
