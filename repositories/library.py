"""
Consultas y comandos por llamada de la biblioteca de cómics.

Cada función abre su propia unidad de trabajo, ejecuta exactamente una
lectura o una escritura y libera la conexión antes de retornar. Los
resultados se materializan por completo, con sus filas relacionadas cargadas
de forma anticipada, para poder usarlos después de cerrada la unidad de
trabajo.
"""

from typing import List, Optional
import logging

from database.context import unit_of_work
from database.models import ComicBookORM, SeriesORM, ArtistORM, RoleORM
from repositories.comic_books_repository import ComicBooksRepository
from repositories.series_repository import SeriesRepository
from repositories.artists_repository import ArtistsRepository, RolesRepository

logger = logging.getLogger(__name__)


def get_comic_book_count() -> int:
    """Retorna el número de cómics."""
    with unit_of_work() as context:
        return ComicBooksRepository(context).get_count()


def get_comic_books() -> List[ComicBookORM]:
    """
    Retorna todos los cómics ordenados por título de serie y luego por número.

    Cada cómic trae su serie cargada.
    """
    with unit_of_work() as context:
        return ComicBooksRepository(context).get_list()


def get_comic_book(comic_book_id: int) -> Optional[ComicBookORM]:
    """
    Retorna un único cómic, completamente poblado.

    Se cargan la serie y el artista y rol de cada crédito.

    Args:
        comic_book_id: ID del cómic a obtener

    Returns:
        El cómic, o None si ninguna fila tiene ese id

    Raises:
        MultipleMatchesException: Si coincidió más de una fila
    """
    with unit_of_work() as context:
        return ComicBooksRepository(context).get(comic_book_id)


def get_series() -> List[SeriesORM]:
    """Retorna todas las series ordenadas por título."""
    with unit_of_work() as context:
        return SeriesRepository(context).get_list()


def get_series_by_id(series_id: int) -> Optional[SeriesORM]:
    """Retorna una serie (sin sus cómics), o None."""
    with unit_of_work() as context:
        return SeriesRepository(context).get(series_id, include_related_entities=False)


def get_artists() -> List[ArtistORM]:
    """Retorna todos los artistas ordenados por nombre."""
    with unit_of_work() as context:
        return ArtistsRepository(context).get_list()


def get_roles() -> List[RoleORM]:
    """Retorna todos los roles ordenados por nombre."""
    with unit_of_work() as context:
        return RolesRepository(context).get_list()


def add_comic_book(comic_book: ComicBookORM) -> ComicBookORM:
    """
    Agrega un cómic.

    La serie, artistas y roles marcados ``EXISTING_UNCHANGED`` (o cargados
    desde el almacén) solo se enlazan; nunca se insertan ni se actualizan.
    Las filas relacionadas en estado ``NEW`` se insertan junto con el cómic.

    Cada fila existente debe aparecer en el grafo como una sola instancia:
    dos objetos construidos por separado con el mismo id (por ejemplo dos
    ``ArtistORM(id=3).mark_existing()``) lanzan ``InvalidRequestError`` de
    SQLAlchemy. Reutilice la misma instancia para cada crédito.

    Args:
        comic_book: Cómic a agregar

    Returns:
        El mismo cómic, con su id generado
    """
    with unit_of_work() as context:
        return ComicBooksRepository(context).add(comic_book)


def update_comic_book(comic_book: ComicBookORM) -> ComicBookORM:
    """
    Actualiza un cómic que ninguna unidad de trabajo está siguiendo.

    La instancia se reasocia y todas las columnas se escriben tal como
    llegan: un campo que el llamador dejó vacío sobrescribe el valor
    almacenado. No existe actualización parcial. Si el cómic trae asignada
    su ``series``, el id de esa serie decide ``series_id``.

    Args:
        comic_book: Cómic desconectado con su id

    Raises:
        ValidationException: Si el cómic, o la serie que referencia, no tiene id
    """
    with unit_of_work() as context:
        return ComicBooksRepository(context).update(comic_book)


def delete_comic_book(comic_book_id: int) -> None:
    """
    Elimina un cómic por id sin leerlo antes.

    Sus créditos los elimina la cascada del almacén.

    Raises:
        NotFoundException: Si ninguna fila tiene ese id
    """
    with unit_of_work() as context:
        ComicBooksRepository(context).delete(comic_book_id)
