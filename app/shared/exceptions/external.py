"""
Excepciones de integraciones externas (Airtable).
"""
from typing import Optional

from app.shared.exceptions.base import AppException


class UpstreamException(AppException):
    """
    Respuesta no exitosa de un servicio externo.

    Se propaga al caller sin reintentos ni rollback: si una operacion
    compuesta falla a la mitad, lo ya creado queda creado.
    """

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        upstream_body: str = "",
    ):
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body
        super().__init__(
            message=message,
            status_code=502,
            error_code="UPSTREAM_ERROR",
            details={
                "upstream_status": upstream_status,
                "upstream_body": upstream_body,
            },
        )
