"""
Inyección de dependencias para el ciclo de vida de la petición, repositorios y servicios.

Se abre un Context (unidad de trabajo) por petición y se inyecta en cada
repositorio que la petición usa; se cierra al terminar la petición, tanto
en éxito como en error.
"""

from typing import Generator
import logging

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError

from database.context import Context
from repositories.comic_books_repository import ComicBooksRepository
from repositories.series_repository import SeriesRepository
from repositories.artists_repository import ArtistsRepository, RolesRepository
from services.comic_book_service import ComicBookService

logger = logging.getLogger(__name__)


# ==================== Request Context ====================

def get_context() -> Generator[Context, None, None]:
    """Dependencia de FastAPI que provee la unidad de trabajo de la petición.

    Yields:
        Context: Unidad de trabajo compartida por los repositorios de la petición

    Note:
        - Hace rollback automático en errores de SQLAlchemy
        - Siempre libera la sesión
        - HTTPException y los errores de la aplicación pasan sin cambios
    """
    context = Context()
    try:
        yield context
    except SQLAlchemyError as e:
        logger.error(f"Database error in request context: {e}")
        context.rollback()
        raise
    finally:
        context.close()


# ==================== Repository Dependencies ====================

def get_comic_books_repository(context: Context = Depends(get_context)) -> ComicBooksRepository:
    return ComicBooksRepository(context)


def get_series_repository(context: Context = Depends(get_context)) -> SeriesRepository:
    return SeriesRepository(context)


def get_artists_repository(context: Context = Depends(get_context)) -> ArtistsRepository:
    return ArtistsRepository(context)


def get_roles_repository(context: Context = Depends(get_context)) -> RolesRepository:
    return RolesRepository(context)


# ==================== Service Dependencies ====================

def get_comic_book_service(
    repository: ComicBooksRepository = Depends(get_comic_books_repository),
    series_repository: SeriesRepository = Depends(get_series_repository),
    artists_repository: ArtistsRepository = Depends(get_artists_repository),
    roles_repository: RolesRepository = Depends(get_roles_repository),
) -> ComicBookService:
    """
    Obtiene un ComicBookService cuyos repositorios comparten el Context de la petición.

    FastAPI cachea ``get_context`` por petición, así que los cuatro repositorios
    reciben la misma unidad de trabajo.
    """
    return ComicBookService(repository, series_repository, artists_repository, roles_repository)
