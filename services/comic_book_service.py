"""
Servicio para la lógica de negocio de cómics.

Convierte los payloads de las peticiones en entidades, aplica las reglas de
validación de la biblioteca y delega la persistencia a los repositorios.
"""

from typing import List
import logging

from repositories.comic_books_repository import ComicBooksRepository
from repositories.series_repository import SeriesRepository
from repositories.artists_repository import ArtistsRepository, RolesRepository
from database.models import ComicBookORM
from models.comic_books import ComicBook, ComicBookCreate, ComicBookListItem, ComicBookUpdate
from core.exceptions import DuplicateException, NotFoundException

logger = logging.getLogger(__name__)


class ComicBookService:
    """Servicio para gestionar cómics."""

    def __init__(
        self,
        repository: ComicBooksRepository,
        series_repository: SeriesRepository,
        artists_repository: ArtistsRepository,
        roles_repository: RolesRepository,
    ):
        """
        Inicializa el servicio de cómics.

        Todos los repositorios deben compartir el Context de la petición.
        """
        self.repository = repository
        self.series_repo = series_repository
        self.artists_repo = artists_repository
        self.roles_repo = roles_repository

    def get_comic_books(self) -> List[ComicBookListItem]:
        """Lista todos los cómics ordenados por título de serie y luego por número."""
        return [ComicBookListItem.model_validate(cb) for cb in self.repository.get_list()]

    def get_comic_book_count(self) -> int:
        return self.repository.get_count()

    def get_comic_book(self, comic_book_id: int) -> ComicBook:
        """
        Obtiene un cómic completamente poblado.

        Raises:
            NotFoundException: Si el cómic no existe
        """
        return ComicBook.model_validate(self.repository.get_or_fail(comic_book_id))

    def create_comic_book(self, data: ComicBookCreate) -> ComicBook:
        """
        Crea un cómic con sus créditos.

        La serie, artistas y roles se cargan desde el almacén, así que se
        enlazan como filas existentes y nunca se vuelven a insertar.

        Raises:
            NotFoundException: Si falta la serie, un artista o un rol
            DuplicateException: Si el número ya está usado en la serie,
                o el mismo crédito artista/rol aparece dos veces
        """
        series = self.series_repo.get_or_fail(data.series_id, include_related_entities=False)
        self._validate_issue_number(None, data.series_id, data.issue_number)

        comic_book = ComicBookORM(
            series=series,
            issue_number=data.issue_number,
            description=data.description,
            published_on=data.published_on,
            average_rating=data.average_rating,
        )

        credited = set()
        for credit in data.artists:
            key = (credit.artist_id, credit.role_id)
            if key in credited:
                raise DuplicateException(
                    resource="Credit",
                    field="artist_id/role_id",
                    value=f"{credit.artist_id}/{credit.role_id}",
                )
            credited.add(key)
            artist = self.artists_repo.get_or_fail(credit.artist_id, include_related_entities=False)
            role = self.roles_repo.get_or_fail(credit.role_id)
            comic_book.add_artist(artist, role)

        created = self.repository.add(comic_book)
        logger.info(f"Comic book {created.id} created: {created.display_text}")
        return ComicBook.model_validate(self.repository.get_or_fail(created.id))

    def update_comic_book(self, comic_book_id: int, data: ComicBookUpdate) -> ComicBook:
        """
        Reemplaza todos los campos de un cómic.

        Los campos opcionales ausentes en ``data`` se vacían. Los créditos no
        se tocan.

        Raises:
            NotFoundException: Si falta el cómic o la serie
            DuplicateException: Si el número ya está usado en la serie
        """
        if not self.repository.exists(comic_book_id):
            raise NotFoundException(resource="ComicBook", identifier=str(comic_book_id))
        if not self.series_repo.exists(data.series_id):
            raise NotFoundException(resource="Series", identifier=str(data.series_id))
        self._validate_issue_number(comic_book_id, data.series_id, data.issue_number)

        comic_book = ComicBookORM(id=comic_book_id, **data.model_dump())
        self.repository.update(comic_book)
        logger.info(f"Comic book {comic_book_id} updated")
        return ComicBook.model_validate(self.repository.get_or_fail(comic_book_id))

    def delete_comic_book(self, comic_book_id: int) -> None:
        """
        Elimina un cómic y sus créditos.

        Raises:
            NotFoundException: Si el cómic no existe
        """
        self.repository.delete(comic_book_id)
        logger.info(f"Comic book {comic_book_id} deleted")

    def _validate_issue_number(self, comic_book_id, series_id: int, issue_number: int) -> None:
        if self.repository.series_has_issue_number(comic_book_id, series_id, issue_number):
            raise DuplicateException(
                resource="ComicBook",
                field="issue_number",
                value=str(issue_number),
            )
