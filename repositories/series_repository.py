"""
Repositorio para la entidad Series.
"""

from typing import List, Optional

from sqlalchemy.orm import selectinload

from repositories.base_repository import BaseRepository
from repositories.comic_books_repository import single_or_none
from database.context import Context
from database.models import SeriesORM
from core.ordering import text_ordering


class SeriesRepository(BaseRepository[SeriesORM]):
    """Repositorio para la entidad Series."""

    def __init__(self, context: Context):
        super().__init__(context, SeriesORM)

    def get(self, id: int, include_related_entities: bool = True) -> Optional[SeriesORM]:
        """
        Obtiene una serie por su ID.

        Las entidades relacionadas son los cómics de la serie, por número.
        """
        query = self.context.series
        if include_related_entities:
            query = query.options(selectinload(SeriesORM.comic_books))
        return single_or_none(query.filter(SeriesORM.id == id), self.entity_name, id)

    def get_list(self) -> List[SeriesORM]:
        """Obtiene todas las series ordenadas por título."""
        return self.context.series.order_by(
            *text_ordering(SeriesORM.title), SeriesORM.id.asc()
        ).all()
