"""
Repositorio para la entidad ComicBook.
Maneja todas las operaciones de base de datos relacionadas con cómics y sus créditos.
"""

from typing import List, Optional
import logging

from sqlalchemy import inspect
from sqlalchemy.orm import Query, contains_eager, joinedload, selectinload
from sqlalchemy.orm.exc import MultipleResultsFound

from repositories.base_repository import BaseRepository
from database.context import Context
from database.models import ComicBookORM, ComicBookArtistORM, SeriesORM, PersistenceState
from core.exceptions import MultipleMatchesException
from core.ordering import text_ordering

logger = logging.getLogger(__name__)


def with_series(query: Query) -> Query:
    """Carga de forma anticipada la serie de cada cómic."""
    return query.options(joinedload(ComicBookORM.series))


def with_credits(query: Query) -> Query:
    """Carga de forma anticipada la serie de cada cómic y el artista y rol de cada crédito."""
    return with_series(query).options(
        selectinload(ComicBookORM.artists).joinedload(ComicBookArtistORM.artist),
        selectinload(ComicBookORM.artists).joinedload(ComicBookArtistORM.role),
    )


def ordered_by_series(query: Query) -> Query:
    """Carga la serie en el mismo join y ordena por título de serie y luego por número."""
    return query.join(ComicBookORM.series).options(
        contains_eager(ComicBookORM.series)
    ).order_by(
        *text_ordering(SeriesORM.title),
        ComicBookORM.issue_number.asc(),
        ComicBookORM.id.asc(),
    )


def single_or_none(query: Query, resource: str, identifier: int):
    """
    Devuelve la única fila de ``query`` o None.

    Raises:
        MultipleMatchesException: Si coincide más de una fila
    """
    try:
        return query.one_or_none()
    except MultipleResultsFound:
        logger.critical(f"More than one {resource} matched id {identifier}")
        raise MultipleMatchesException(resource=resource, identifier=str(identifier))


class ComicBooksRepository(BaseRepository[ComicBookORM]):
    """Repositorio para la entidad ComicBook."""

    def __init__(self, context: Context):
        """
        Inicializa el repositorio de cómics.

        Args:
            context: Unidad de trabajo de la petición actual
        """
        super().__init__(context, ComicBookORM)

    def get(self, id: int, include_related_entities: bool = True) -> Optional[ComicBookORM]:
        """
        Obtiene un cómic por su ID.

        Con entidades relacionadas se cargan la serie y el artista y rol de
        cada crédito; sin ellas solo la serie.
        """
        query = self.context.comic_books
        query = with_credits(query) if include_related_entities else with_series(query)
        return single_or_none(
            query.filter(ComicBookORM.id == id), self.entity_name, id
        )

    def get_list(self) -> List[ComicBookORM]:
        """Obtiene todos los cómics con su serie, ordenados por título de serie y número."""
        return ordered_by_series(self.context.comic_books).all()

    def add(self, entity: ComicBookORM) -> ComicBookORM:
        """
        Inserta un cómic y sus créditos nuevos, y hace commit.

        La serie, artistas y roles marcados como existentes solo se enlazan;
        los que están en estado NEW se insertan.
        """
        self.attach_related_entities(entity)
        return super().add(entity)

    def update(self, entity: ComicBookORM) -> ComicBookORM:
        """
        Sobrescribe a ciegas un cómic desconectado y hace commit.

        Todas las columnas se guardan tal como llegan, incluso las que el
        llamador no quería cambiar. Las filas relacionadas se concilian
        igual que en ``add``.
        """
        self.attach_related_entities(entity)
        return super().update(entity)

    def attach_related_entities(self, comic_book: ComicBookORM) -> None:
        """
        Sigue como sin cambios la serie, artistas y roles existentes del cómic.

        Solo se revisan las relaciones ya asignadas en la instancia, así que
        no se dispara ninguna carga perezosa.
        """
        related = [inspect(comic_book).dict.get("series")]
        for credit in inspect(comic_book).dict.get("artists", []):
            credit_state = inspect(credit).dict
            related.extend([credit_state.get("artist"), credit_state.get("role")])

        for entity in related:
            if entity is not None and entity.persistence_state is PersistenceState.EXISTING_UNCHANGED:
                self.context.mark_unchanged(entity)

    def get_count(self) -> int:
        """Cuenta los cómics."""
        return self.context.comic_books.count()

    def series_has_issue_number(
        self,
        comic_book_id: Optional[int],
        series_id: int,
        issue_number: int
    ) -> bool:
        """
        Verifica si otro cómic de la serie ya usa un número.

        Args:
            comic_book_id: Cómic que se valida (None si es nuevo)
            series_id: ID de la serie
            issue_number: Número a verificar
        """
        query = self.context.comic_books.filter(
            ComicBookORM.series_id == series_id,
            ComicBookORM.issue_number == issue_number,
        )
        if comic_book_id is not None:
            query = query.filter(ComicBookORM.id != comic_book_id)
        return query.count() > 0
