"""
Endpoints del sidecar de uploads: listado y alta de libros.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from loguru import logger

from app.api.sidecar.dependencies import get_book_use_cases
from app.application.dto.book_dto import BookDTO
from app.application.use_cases.book_use_cases import BookUseCases, IncomingFile

router = APIRouter(prefix="/books", tags=["Books"])


def _incoming(upload: Optional[UploadFile]) -> Optional[IncomingFile]:
    if upload is None or not upload.filename:
        return None
    return IncomingFile(filename=upload.filename, stream=upload.file)


@router.get("", response_model=List[Dict[str, Any]])
def list_books(use_cases: BookUseCases = Depends(get_book_use_cases)):
    """
    Todos los libros, el mas reciente primero.
    """
    return use_cases.list_books()


@router.post("", response_model=BookDTO)
def create_book(
    title: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    link: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    file: Optional[UploadFile] = File(None),
    use_cases: BookUseCases = Depends(get_book_use_cases),
):
    """
    Alta de libro (multipart/form-data).

    Solo `title` es obligatorio; `image` y `file` se guardan en /uploads.
    """
    logger.info(
        f"POST /books: title={title!r}, image={getattr(image, 'filename', None)!r}, "
        f"file={getattr(file, 'filename', None)!r}"
    )
    return use_cases.create_book(
        title=title,
        author=author,
        link=link,
        image=_incoming(image),
        file=_incoming(file),
    )
