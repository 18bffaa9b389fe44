"""
Repositorios para las entidades Artist y Role.
"""

from typing import List, Optional

from sqlalchemy.orm import joinedload, selectinload

from repositories.base_repository import BaseRepository
from repositories.comic_books_repository import single_or_none
from database.context import Context
from database.models import ArtistORM, RoleORM, ComicBookArtistORM, ComicBookORM
from core.ordering import text_ordering


class ArtistsRepository(BaseRepository[ArtistORM]):
    """Repositorio para la entidad Artist."""

    def __init__(self, context: Context):
        super().__init__(context, ArtistORM)

    def get(self, id: int, include_related_entities: bool = True) -> Optional[ArtistORM]:
        """
        Obtiene un artista por su ID.

        Las entidades relacionadas son los créditos del artista, cada uno con
        su cómic (y serie) y su rol.
        """
        query = self.context.artists
        if include_related_entities:
            credits = selectinload(ArtistORM.comic_books)
            query = query.options(
                credits.joinedload(ComicBookArtistORM.comic_book).joinedload(ComicBookORM.series),
                credits.joinedload(ComicBookArtistORM.role),
            )
        return single_or_none(query.filter(ArtistORM.id == id), self.entity_name, id)

    def get_list(self) -> List[ArtistORM]:
        """Obtiene todos los artistas ordenados por nombre."""
        return self.context.artists.order_by(
            *text_ordering(ArtistORM.name), ArtistORM.id.asc()
        ).all()


class RolesRepository(BaseRepository[RoleORM]):
    """Repositorio para la entidad Role. Los roles no tienen entidades relacionadas."""

    def __init__(self, context: Context):
        super().__init__(context, RoleORM)

    def get(self, id: int, include_related_entities: bool = True) -> Optional[RoleORM]:
        return single_or_none(
            self.context.roles.filter(RoleORM.id == id), self.entity_name, id
        )

    def get_list(self) -> List[RoleORM]:
        """Obtiene todos los roles ordenados por nombre."""
        return self.context.roles.order_by(
            *text_ordering(RoleORM.name), RoleORM.id.asc()
        ).all()
