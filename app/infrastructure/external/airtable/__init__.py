"""
Integracion con Airtable (REST API).

Airtable es el almacen durable de todo el dashboard: usuarios, cuentas,
proyectos y updates. Aqui solo hay I/O HTTP y helpers por tabla; el
filtrado/agrupado en memoria vive en application/services.
"""
from app.infrastructure.external.airtable.airtable_client import (
    AirtableApiError,
    AirtableClient,
    AirtableCredentials,
    build_equals_formula,
)
from app.infrastructure.external.airtable.airtable_gateway import AirtableGateway, AirtableTables

__all__ = [
    "AirtableApiError",
    "AirtableClient",
    "AirtableCredentials",
    "AirtableGateway",
    "AirtableTables",
    "build_equals_formula",
]
