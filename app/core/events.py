"""
Manejadores de eventos de inicio y cierre de la aplicacion y del sidecar.
"""
from typing import Callable
from fastapi import FastAPI
from loguru import logger

from app.core.config import settings


def _configure_file_logging() -> None:
    """Agrega el sink de archivo de loguru (rotacion y retencion)."""
    logger.add(
        settings.LOG_FILE,
        rotation="500 MB",
        retention="10 days",
        level=settings.LOG_LEVEL
    )


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Inicializa recursos al inicio de la aplicacion."""
        try:
            logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
            logger.info(f"Entorno: {settings.ENVIRONMENT}")

            # Validar configuracion critica
            _validate_config()

            # Configurar logging adicional
            _configure_file_logging()

            logger.success("Aplicacion iniciada correctamente")

            # Mostrar URLs disponibles
            _print_available_urls(settings.HOST, settings.PORT)

        except Exception as e:
            logger.error(f"Error durante startup: {e}")
            logger.exception("Detalle del error:")
            raise

    return startup


def _validate_config() -> None:
    """Valida que la configuracion critica este presente."""
    warnings = []

    if not settings.AIRTABLE_BASE_ID:
        warnings.append("AIRTABLE_BASE_ID no configurado - el dashboard no podra leer datos")
    if not settings.AIRTABLE_PAT:
        warnings.append("AIRTABLE_PAT no configurado - Airtable respondera 401")
    if settings.SECRET_KEY == "change-this-secret-key-in-production" and not settings.is_development:
        warnings.append("SECRET_KEY por defecto en produccion")

    # Mostrar advertencias
    for warning in warnings:
        logger.warning(f"CONFIG: {warning}")


def _print_available_urls(host: str, port: int) -> None:
    """Imprime las URLs disponibles de la aplicacion."""
    # Determinar la URL base de acceso
    access_host = "localhost" if host == "0.0.0.0" else host
    base_url = f"http://{access_host}:{port}"

    # Mostrar las URLs disponibles
    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")
    logger.opt(colors=True).info("<bold><green>URLS DISPONIBLES:</green></bold>")
    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")
    logger.opt(colors=True).info(f"<cyan>  Swagger UI:  {base_url}/docs</cyan>")
    logger.opt(colors=True).info(f"<cyan>  OpenAPI:     {base_url}/openapi.json</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Health:      {base_url}/health</cyan>")
    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de cierre de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de cierre
    """
    async def shutdown() -> None:
        """Libera recursos al cerrar la aplicacion."""
        logger.info("Cerrando aplicacion...")

        # Las sesiones viven solo en memoria
        closed_sessions = app.state.session_store.clear_all()
        logger.info(f"Sesiones cerradas: {closed_sessions}")

        logger.success("Aplicacion cerrada correctamente")

    return shutdown


def sidecar_startup_handler(app: FastAPI) -> Callable:
    """
    Inicio del sidecar de uploads: logging y URLs.
    La carpeta de uploads y el archivo de datos se preparan en la factory.
    """
    async def startup() -> None:
        _configure_file_logging()
        logger.info(f"Archivo de libros: {app.state.book_repository.data_file}")
        logger.info(f"Sirviendo archivos estaticos desde: {app.state.upload_storage.uploads_dir}")
        if app.state.book_repository.locking:
            logger.info("Locking del archivo de libros activado")
        else:
            logger.warning(
                "Locking del archivo de libros desactivado: altas concurrentes pueden perder registros"
            )
        _print_available_urls(settings.SIDECAR_HOST, settings.SIDECAR_PORT)

    return startup
