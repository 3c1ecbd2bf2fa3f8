"""
Casos de uso del sidecar de uploads (libros).

Flujo de alta: validar titulo -> guardar archivos -> agregar al JSON ->
responder con el libro creado. Si falla el guardado del JSON los archivos
ya escritos quedan en disco.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, List, Optional

from loguru import logger

from app.application.dto.book_dto import BookDTO
from app.infrastructure.repositories.book_repository import Book, BookRepository
from app.infrastructure.storage.upload_storage import UploadStorage
from app.shared.exceptions.domain import ValidationException


@dataclass
class IncomingFile:
    """Parte de archivo de un multipart ya recibido."""
    filename: str
    stream: BinaryIO


class BookUseCases:
    """
    Casos de uso de listado y alta de libros.
    """

    def __init__(self, repository: BookRepository, storage: UploadStorage, public_base_url: str):
        self.repository = repository
        self.storage = storage
        self.public_base_url = public_base_url.rstrip("/")

    def list_books(self) -> List[Book]:
        """
        Devuelve el array del archivo tal cual esta guardado (sin validar
        ni completar campos).
        """
        books = self.repository.read_all()
        logger.info(f"Devolviendo {len(books)} libros")
        return books

    def _public_url(self, stored_name: str) -> str:
        return f"{self.public_base_url}/uploads/{stored_name}"

    def _store(self, part: Optional[IncomingFile]) -> Optional[str]:
        if part is None or not part.filename:
            return None
        return self._public_url(self.storage.save(part.filename, part.stream))

    def create_book(
        self,
        title: Optional[str],
        author: Optional[str] = None,
        link: Optional[str] = None,
        image: Optional[IncomingFile] = None,
        file: Optional[IncomingFile] = None,
    ) -> BookDTO:
        """
        Crea un libro.

        Raises:
            ValidationException: Si falta el titulo (no se escribe nada)
            StorageException: Si falla el disco
        """
        if not title:
            logger.warning("Alta de libro sin titulo")
            raise ValidationException("El titulo es obligatorio", field="title")

        book = BookDTO(
            title=title,
            author=author,
            link=link,
            image_url=self._store(image),
            file_url=self._store(file),
        )
        self.repository.prepend(book.model_dump(by_alias=True))
        return book
