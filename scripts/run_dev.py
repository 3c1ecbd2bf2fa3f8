"""
Script para ejecutar los servidores en modo desarrollo.

Uso:
  python scripts/run_dev.py            # dashboard (main:app)
  python scripts/run_dev.py --sidecar  # sidecar de uploads
"""
import argparse
import sys
from pathlib import Path

import uvicorn

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from app.core.config import settings  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description="Servidores de desarrollo")
    parser.add_argument("--sidecar", action="store_true", help="Levantar el sidecar de uploads")
    args = parser.parse_args()

    if args.sidecar:
        uvicorn.run(
            "sidecar:create_sidecar_application",
            factory=True,
            host=settings.SIDECAR_HOST,
            port=settings.SIDECAR_PORT,
            reload=True,
            log_level=settings.LOG_LEVEL.lower()
        )
        return

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
