"""
Cliente mínimo de Airtable REST API (sin SDKs externos).

Requisitos cubiertos:
- requests
- auth por bearer token (Personal Access Token)
- list (con filterByFormula y paginación por offset), get, create,
  update parcial (PATCH) y delete
- backoff opcional para 429/5xx (desactivado por defecto: max_retries=0)
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Iterable, Optional
from urllib.parse import quote

import requests
from loguru import logger

from app.shared.exceptions.external import UpstreamException

# Registro tal como lo devuelve Airtable: {"id", "createdTime", "fields"}
AirtableRecord = dict[str, Any]


@dataclass(frozen=True)
class AirtableCredentials:
    token: str
    base_id: str


class AirtableApiError(UpstreamException):
    """Error de integración con Airtable (status y texto de la respuesta incluidos)."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message, upstream_status=status_code, upstream_body=body)

    @property
    def is_not_found(self) -> bool:
        return self.upstream_status == 404


def build_equals_formula(field: str, value: str) -> str:
    """
    Construye la fórmula `{field} = "value"` para filterByFormula.

    Las comillas dobles y backslashes del valor se escapan para que un valor
    arbitrario no rompa la fórmula.
    """
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return "{" + field + "} = \"" + escaped + "\""


class AirtableClient:
    """
    Cliente HTTP de Airtable genérico por tabla.

    Importante:
    - No hace cast de tipos de campos: los records se devuelven tal cual.
    - Cualquier respuesta no 2xx termina en AirtableApiError.
    """

    def __init__(
        self,
        credentials: AirtableCredentials,
        *,
        session: Optional[requests.Session] = None,
        base_url: str = "https://api.airtable.com/v0",
        timeout_s: int = 30,
        max_retries: int = 0,
        min_backoff_s: float = 0.8,
        max_backoff_s: float = 20.0,
    ) -> None:
        self._creds = credentials
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._min_backoff_s = min_backoff_s
        self._max_backoff_s = max_backoff_s
        self._session = session or requests.Session()

    def table_url(self, table_name: str, record_id: Optional[str] = None) -> str:
        url = f"{self._base_url}/{self._creds.base_id}/{quote(table_name, safe='')}"
        if record_id:
            url = f"{url}/{quote(record_id, safe='')}"
        return url

    def iter_records(
        self,
        table_name: str,
        *,
        formula: Optional[str] = None,
        fields: Optional[list[str]] = None,
        page_size: int = 100,
    ) -> Iterable[AirtableRecord]:
        """
        Itera los registros de una tabla siguiendo la paginación por 'offset'.

        El orden es el que devuelve Airtable (no se fuerza sort).
        """
        url = self.table_url(table_name)
        offset: Optional[str] = None

        while True:
            query: list[tuple[str, Any]] = [("pageSize", page_size)]
            if formula:
                query.append(("filterByFormula", formula))
            if offset:
                query.append(("offset", offset))
            if fields:
                # Airtable permite repetir "fields[]" en querystring.
                for f in fields:
                    query.append(("fields[]", f))

            payload = self._request_json("GET", url, query=query)
            for rec in payload.get("records") or []:
                yield rec

            offset = payload.get("offset")
            if not offset:
                break

    def list_records(
        self,
        table_name: str,
        *,
        formula: Optional[str] = None,
        fields: Optional[list[str]] = None,
        page_size: int = 100,
    ) -> list[AirtableRecord]:
        return list(
            self.iter_records(table_name, formula=formula, fields=fields, page_size=page_size)
        )

    def get_record(self, table_name: str, record_id: str) -> AirtableRecord:
        return self._request_json("GET", self.table_url(table_name, record_id))

    def get_records(self, table_name: str, record_ids: Iterable[str]) -> list[AirtableRecord]:
        """
        Trae varios registros por ID, uno por request, respetando el orden dado.

        Una lista vacía no hace I/O.
        """
        return [self.get_record(table_name, record_id) for record_id in record_ids or []]

    def create_record(self, table_name: str, fields: dict[str, Any]) -> AirtableRecord:
        return self._request_json("POST", self.table_url(table_name), body={"fields": fields})

    def update_record(
        self, table_name: str, record_id: str, fields: dict[str, Any]
    ) -> AirtableRecord:
        """Update parcial (PATCH): solo se tocan los fields enviados."""
        return self._request_json(
            "PATCH", self.table_url(table_name, record_id), body={"fields": fields}
        )

    def delete_record(self, table_name: str, record_id: str) -> dict[str, Any]:
        return self._request_json("DELETE", self.table_url(table_name, record_id))

    def _request_json(
        self,
        method: str,
        url: str,
        *,
        query: Optional[list[tuple[str, Any]]] = None,
        body: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Request HTTP con backoff opcional para 429/5xx.

        Estrategia:
        - 429: respeta Retry-After si existe, si no exponencial con jitter simple.
        - 5xx: exponencial con jitter.
        - 4xx (no 429): error inmediato (config/auth mal).
        Con max_retries=0 cualquier error se propaga en el primer intento.
        """
        headers = {
            "Authorization": f"Bearer {self._creds.token}",
            "Content-Type": "application/json",
        }

        for attempt in range(self._max_retries + 1):
            logger.debug(f"[Airtable] {method} {url}")
            try:
                resp = self._session.request(
                    method=method,
                    url=url,
                    params=query,
                    json=body,
                    headers=headers,
                    timeout=self._timeout_s,
                )
            except requests.RequestException as e:
                logger.error(f"[Airtable] Error de red en {method} {url}: {e}")
                raise AirtableApiError(f"Airtable no disponible: {e}") from e

            if 200 <= resp.status_code < 300:
                try:
                    return resp.json()
                except ValueError as e:
                    raise AirtableApiError(
                        "Airtable devolvió una respuesta que no es JSON",
                        status_code=resp.status_code,
                        body=resp.text,
                    ) from e

            # Errores recuperables
            if resp.status_code == 429 or 500 <= resp.status_code < 600:
                if attempt >= self._max_retries:
                    logger.error(f"[Airtable] Error {resp.status_code} en {method} {url}: {resp.text}")
                    raise AirtableApiError(
                        f"Airtable error {resp.status_code} tras {attempt} reintentos",
                        status_code=resp.status_code,
                        body=resp.text,
                    )

                retry_after = resp.headers.get("Retry-After")
                if retry_after:
                    try:
                        sleep_s = float(retry_after)
                    except ValueError:
                        sleep_s = self._min_backoff_s
                else:
                    # Exponencial simple + jitter proporcional
                    base = min(self._max_backoff_s, self._min_backoff_s * (2**attempt))
                    sleep_s = base + (0.15 * base)

                logger.warning(
                    f"[Airtable] {resp.status_code} en {method} {url}, reintento en {sleep_s:.1f}s"
                )
                time.sleep(sleep_s)
                continue

            # Errores no recuperables
            logger.error(f"[Airtable] Error {resp.status_code} en {method} {url}: {resp.text}")
            raise AirtableApiError(
                f"Airtable request falló {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )

        # Inalcanzable: el loop siempre retorna o lanza
        raise AirtableApiError("Airtable request sin respuesta")
