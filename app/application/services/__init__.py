"""
Servicios de aplicacion.

Contiene la logica de negocio reutilizable que no pertenece
a un caso de uso especifico.
"""
from app.application.services.update_aggregator import (
    group_by_project,
    select_for_date,
    format_date_for_airtable,
    today_ist,
)
from app.application.services.record_filters import (
    filter_accounts,
    filter_projects,
    distinct_account_types,
    project_name_index,
)

__all__ = [
    # Tablero diario
    "group_by_project",
    "select_for_date",
    "format_date_for_airtable",
    "today_ist",
    # Barras de busqueda
    "filter_accounts",
    "filter_projects",
    "distinct_account_types",
    "project_name_index",
]
