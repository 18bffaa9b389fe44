"""
Capa de repositorios para acceso a datos.
Este paquete contiene las clases repository que ejecutan todas las
operaciones de base de datos. Los repositorios son una abstracción sobre el
ORM y no deben contener lógica de negocio.

"""

from .base_repository import BaseRepository
from .comic_books_repository import ComicBooksRepository
from .series_repository import SeriesRepository
from .artists_repository import ArtistsRepository, RolesRepository

__all__ = [
    "BaseRepository",
    "ComicBooksRepository",
    "SeriesRepository",
    "ArtistsRepository",
    "RolesRepository",
]
