"""
Filtros en memoria de las barras de busqueda del dashboard.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

Record = Dict[str, Any]


def _field_lower(record: Record, field: str) -> str:
    value = (record.get("fields") or {}).get(field)
    return str(value).lower() if value else ""


def filter_accounts(
    accounts: Iterable[Record],
    search: Optional[str] = None,
    account_type: Optional[str] = None,
) -> List[Record]:
    """
    Busqueda por substring (case-insensitive) sobre nombre o tipo de cuenta,
    combinada con filtro exacto por tipo.
    """
    needle = (search or "").lower()
    result = []
    for account in accounts:
        name = _field_lower(account, "Account Name")
        kind = _field_lower(account, "Account Type")
        matches_search = needle in name or needle in kind
        matches_type = (
            (account.get("fields") or {}).get("Account Type") == account_type
            if account_type
            else True
        )
        if matches_search and matches_type:
            result.append(account)
    return result


def distinct_account_types(accounts: Iterable[Record]) -> List[str]:
    """Tipos de cuenta presentes, en orden de aparicion."""
    seen: List[str] = []
    for account in accounts:
        kind = (account.get("fields") or {}).get("Account Type")
        if kind and kind not in seen:
            seen.append(kind)
    return seen


def filter_projects(
    projects: Iterable[Record],
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Record]:
    """
    Busqueda por substring sobre nombre o estado; el filtro de estado
    compara sin distinguir mayusculas.
    """
    needle = (search or "").lower()
    wanted_status = (status or "").lower()
    result = []
    for project in projects:
        name = _field_lower(project, "Project Name")
        current_status = _field_lower(project, "Project Status")
        matches_search = needle in name or needle in current_status
        matches_status = current_status == wanted_status if wanted_status else True
        if matches_search and matches_status:
            result.append(project)
    return result


def project_name_index(projects: Iterable[Record]) -> Dict[str, str]:
    # Fallback al ID cuando el proyecto no tiene nombre
    return {
        project["id"]: (project.get("fields") or {}).get("Project Name") or project["id"]
        for project in projects
    }
