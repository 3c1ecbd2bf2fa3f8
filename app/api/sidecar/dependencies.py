"""
Dependencias del sidecar de uploads.
"""
from fastapi import Request

from app.application.use_cases.book_use_cases import BookUseCases


def get_book_use_cases(request: Request) -> BookUseCases:
    """
    Casos de uso de libros sobre el repositorio y la carpeta de uploads
    creados en create_sidecar_application.

    La URL publica de los archivos sale de UPLOADS_PUBLIC_BASE_URL o, si
    esta vacia, de la URL base del request.
    """
    state = request.app.state
    base_url = state.uploads_public_base_url or str(request.base_url)
    return BookUseCases(state.book_repository, state.upload_storage, base_url)
