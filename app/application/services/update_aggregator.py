"""
Agregacion de updates por proyecto y por fecha.

Es la logica del tablero diario de proyectos: a partir de todos los updates
traidos de Airtable y de los proyectos del usuario, arma el indice
proyecto -> updates (ProjectUpdateIndex) y luego elige un update por proyecto
para la fecha consultada.

Funciones puras: no hacen I/O ni lanzan errores; la ausencia se representa
con listas vacias o None.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from loguru import logger

from app.shared.constants.kam_constants import (
    BOARD_UTC_OFFSET_MINUTES,
    UPDATE_DATE_FIELD,
    UPDATE_PROJECT_FIELD,
)

Update = Dict[str, Any]
DateLike = Union[date, datetime, str]

BOARD_TZ = timezone(timedelta(minutes=BOARD_UTC_OFFSET_MINUTES))


def project_ref(update: Update) -> Optional[str]:
    """
    Proyecto al que pertenece un update: el primer elemento de `Project`.

    Returns:
        El ID del proyecto o None si el update no referencia ninguno.
    """
    refs = (update.get("fields") or {}).get(UPDATE_PROJECT_FIELD) or []
    if isinstance(refs, str):
        return refs or None
    return refs[0] if refs else None


def group_by_project(
    updates: Iterable[Update], project_ids: Iterable[str]
) -> Dict[str, List[Update]]:
    """
    Agrupa updates por proyecto.

    - Todo ID pedido aparece como key, aunque no tenga updates.
    - Un update cuyo proyecto no fue pedido (o que no tiene proyecto) se
      descarta sin error.
    - Dentro de cada lista se conserva el orden de entrada (orden de fetch).
    """
    grouped: Dict[str, List[Update]] = {project_id: [] for project_id in project_ids}
    dropped = 0

    for update in updates:
        project_id = project_ref(update)
        if project_id is not None and project_id in grouped:
            grouped[project_id].append(update)
        else:
            dropped += 1

    if dropped:
        logger.debug(f"group_by_project: {dropped} updates sin proyecto solicitado descartados")
    return grouped


def format_date_for_airtable(value: DateLike) -> str:
    """
    Normaliza una fecha al formato de los fields Date de Airtable (YYYY-MM-DD).

    Acepta date, datetime o un string ISO (se toma la parte de fecha).
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()[:10]


def select_for_date(
    grouped: Dict[str, List[Update]], target_date: DateLike
) -> Dict[str, Optional[Update]]:
    """
    Elige, por proyecto, el update cuya fecha es exactamente `target_date`.

    Si hay varios gana el primero en orden de fetch; si no hay ninguno el
    valor es None.
    """
    wanted = format_date_for_airtable(target_date)
    selected: Dict[str, Optional[Update]] = {}

    for project_id, project_updates in grouped.items():
        selected[project_id] = next(
            (
                update
                for update in project_updates
                if (update.get("fields") or {}).get(UPDATE_DATE_FIELD) == wanted
            ),
            None,
        )
    return selected


def today_ist(now: Optional[datetime] = None) -> str:
    """Fecha de hoy en IST (UTC+05:30), fecha por defecto del tablero."""
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    return current.astimezone(BOARD_TZ).date().isoformat()
