"""
Repositorio de libros sobre un archivo JSON.

El archivo contiene un array JSON con los libros, el mas nuevo primero.
No hay IDs ni update/delete: solo listar y agregar.

Concurrencia:
- Agregar es un read-modify-write del archivo completo.
- Sin locking (default) dos altas simultaneas pueden leer el mismo array y
  la segunda escritura pisa a la primera (se pierde un libro).
- Con `locking=True` el read-modify-write se serializa con un lock
  exclusivo por archivo, liberado en cualquier salida.
"""
from __future__ import annotations

import json
import threading
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Any, ContextManager, Dict, Iterator, List

from loguru import logger

from app.shared.exceptions.domain import StorageException

Book = Dict[str, Any]


class BookRepository:
    """
    Gestiona el archivo books.json.
    """

    _locks: Dict[str, threading.Lock] = {}
    _meta_lock = threading.Lock()

    def __init__(self, data_file: Path | str, *, locking: bool = False):
        self.data_file = Path(data_file)
        self.locking = locking

    @classmethod
    def _get_or_create_lock(cls, key: str) -> threading.Lock:
        """Obtiene o crea el lock asociado a un archivo."""
        with cls._meta_lock:
            lock = cls._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                cls._locks[key] = lock
            return lock

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        lock = self._get_or_create_lock(str(self.data_file.resolve()))
        with lock:
            yield

    def _write_guard(self) -> ContextManager[None]:
        return self._exclusive() if self.locking else nullcontext()

    def ensure_storage(self) -> None:
        """Crea la carpeta del archivo y lo inicializa con [] si no existe."""
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            if not self.data_file.exists():
                self.data_file.write_text("[]", encoding="utf-8")
                logger.info(f"Archivo de libros creado: {self.data_file}")
        except OSError as e:
            logger.error(f"No se pudo preparar {self.data_file}: {e}")
            raise StorageException("No se pudo preparar el archivo de datos", str(self.data_file)) from e

    def read_all(self) -> List[Book]:
        """
        Lee todos los libros.

        Un archivo vacio equivale a [].

        Raises:
            StorageException: si el archivo no se puede leer o no es un array JSON
        """
        try:
            raw = self.data_file.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Error leyendo {self.data_file}: {e}")
            raise StorageException("No se pudo leer el archivo de datos", str(self.data_file)) from e

        try:
            books = json.loads(raw) if raw.strip() else []
        except json.JSONDecodeError as e:
            logger.error(f"JSON invalido en {self.data_file}: {e}")
            raise StorageException("Formato JSON invalido en el archivo de datos", str(self.data_file)) from e

        if not isinstance(books, list):
            logger.error(f"{self.data_file} no contiene un array JSON")
            raise StorageException("El archivo de datos no contiene una lista", str(self.data_file))
        return books

    def write_all(self, books: List[Book]) -> None:
        try:
            self.data_file.write_text(json.dumps(books, indent=2), encoding="utf-8")
        except (OSError, TypeError) as e:
            logger.error(f"Error escribiendo {self.data_file}: {e}")
            raise StorageException("No se pudo guardar el libro", str(self.data_file)) from e

    def prepend(self, book: Book) -> Book:
        """
        Agrega un libro al inicio del array y reescribe el archivo.

        Returns:
            El libro agregado
        """
        with self._write_guard():
            books = self.read_all()
            books.insert(0, book)
            self.write_all(books)
        logger.info(f"Libro guardado: {book.get('title')} (total: {len(books)})")
        return book
