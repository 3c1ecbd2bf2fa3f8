"""
Sidecar de uploads: servicio aparte que guarda imagenes/archivos de libros
en disco y los lista desde un archivo JSON.

Rutas:
- GET  /books
- POST /books (multipart/form-data)
- GET  /uploads/<archivo>
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.core.config import Settings, settings, get_cors_origins
from app.core.events import sidecar_startup_handler
from app.api.sidecar import books
from app.api.middlewares.error_handler import ErrorHandlerMiddleware, register_exception_handlers
from app.infrastructure.repositories.book_repository import BookRepository
from app.infrastructure.storage.upload_storage import UploadStorage


def create_sidecar_application(config: Optional[Settings] = None) -> FastAPI:
    """
    Factory del sidecar.

    Crea la carpeta de uploads y el archivo de datos si no existen, antes
    de montar /uploads.

    Args:
        config: Settings a usar (default: settings globales)

    Returns:
        FastAPI: Instancia configurada del sidecar
    """
    config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await sidecar_startup_handler(app)()
        yield

    application = FastAPI(
        title=f"{config.APP_NAME} - Uploads",
        version=config.APP_VERSION,
        lifespan=lifespan,
    )

    repository = BookRepository(config.BOOKS_DATA_FILE, locking=config.BOOKS_STORE_LOCKING)
    repository.ensure_storage()
    storage = UploadStorage(config.UPLOADS_DIR)
    storage.ensure_dir()

    application.state.book_repository = repository
    application.state.upload_storage = storage
    application.state.uploads_public_base_url = config.UPLOADS_PUBLIC_BASE_URL

    application.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(config.CORS_ORIGINS),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(ErrorHandlerMiddleware)

    application.include_router(books.router)
    application.mount("/uploads", StaticFiles(directory=str(storage.uploads_dir)), name="uploads")

    register_exception_handlers(application)

    return application


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        create_sidecar_application(),
        host=settings.SIDECAR_HOST,
        port=settings.SIDECAR_PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
