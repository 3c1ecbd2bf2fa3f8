"""
Almacenamiento en disco de los archivos subidos al sidecar.

Los archivos se guardan tal cual en UPLOADS_DIR con el nombre
`<epoch en ms>-<nombre original>`. No se valida tipo, tamaño ni contenido.
Dos uploads con el mismo nombre en el mismo milisegundo no se pisan: el
segundo toma el milisegundo siguiente.
"""
from __future__ import annotations

import shutil
import time
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Tuple

from loguru import logger

from app.shared.exceptions.domain import StorageException

_MAX_NAME_ATTEMPTS = 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


class UploadStorage:
    """Escribe uploads en una carpeta local servida bajo /uploads."""

    def __init__(self, uploads_dir: Path | str, clock: Optional[Callable[[], int]] = None):
        self.uploads_dir = Path(uploads_dir)
        self._clock = clock or _now_ms

    def ensure_dir(self) -> None:
        if not self.uploads_dir.exists():
            self.uploads_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Carpeta de uploads creada: {self.uploads_dir}")

    def unique_name(self, original_name: str, stamp: Optional[int] = None) -> str:
        # Solo el nombre base: un filename con rutas no puede salir de la carpeta
        base = Path(original_name or "").name or "upload"
        return f"{self._clock() if stamp is None else stamp}-{base}"

    def _open_new(self, original_name: str) -> Tuple[str, BinaryIO]:
        """
        Crea el archivo destino en modo exclusivo.

        Si `<ms>-<nombre>` ya existe (mismo nombre en el mismo milisegundo)
        se prueba con el milisegundo siguiente, asi nunca se pisa un upload.
        """
        stamp = self._clock()
        for _ in range(_MAX_NAME_ATTEMPTS):
            stored_name = self.unique_name(original_name, stamp)
            try:
                return stored_name, (self.uploads_dir / stored_name).open("xb")
            except FileExistsError:
                stamp += 1
        raise StorageException("No se encontro un nombre libre para el upload", str(self.uploads_dir))

    def save(self, original_name: str, stream: BinaryIO) -> str:
        """
        Copia el stream al disco.

        Returns:
            El nombre con el que quedo guardado el archivo
        """
        target = self.uploads_dir
        try:
            stored_name, fh = self._open_new(original_name)
            target = self.uploads_dir / stored_name
            logger.info(f"Guardando '{original_name}' como '{target}'")
            with fh:
                shutil.copyfileobj(stream, fh)
        except OSError as e:
            logger.error(f"Error guardando upload {target}: {e}")
            raise StorageException("No se pudo guardar el archivo subido", str(target)) from e
        return stored_name
