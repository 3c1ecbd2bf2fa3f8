"""
CLI: verifica la conexion con Airtable y la clave de un usuario.

Ejecucion:
  python scripts/check_airtable.py
  python scripts/check_airtable.py --secret-key 123456
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from app.core.config import settings  # noqa: E402
from app.infrastructure.external.airtable.airtable_gateway import AirtableGateway  # noqa: E402
from app.infrastructure.security.secret_key_auth_service import SecretKeyAuthService  # noqa: E402
from app.shared.exceptions.external import UpstreamException  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Chequeo de Airtable")
    parser.add_argument("--secret-key", help="Clave de 6 digitos a resolver")
    args = parser.parse_args()

    if not settings.airtable_configured:
        logger.error("Faltan AIRTABLE_BASE_ID / AIRTABLE_PAT")
        return 2

    gateway = AirtableGateway.from_settings(settings)
    try:
        updates = gateway.fetch_all_updates()
        logger.info(f"Tabla {gateway.tables.updates}: {len(updates)} updates")

        if args.secret_key:
            user = SecretKeyAuthService(gateway).find_user(args.secret_key)
            if user is None:
                logger.warning("La clave no corresponde a ningun usuario")
                return 1
            fields = user.get("fields") or {}
            logger.success(
                f"Usuario {fields.get('User Name')} ({user['id']}): "
                f"{len(fields.get('Accounts') or [])} cuentas, "
                f"{len(fields.get('Projects') or [])} proyectos, "
                f"{len(fields.get('Updates') or [])} updates"
            )
    except UpstreamException as e:
        logger.error(f"Airtable respondio {e.upstream_status}: {e.upstream_body}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
