"""
Tests for ComicBooksRepository.

Tests cover:
- Read operations (by id, with and without related entities, lists)
- Create operations with existing and new related entities
- Blind overwrite updates
- Delete by id
- Validation queries
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.orm import Session
from typing import Dict

from database.context import Context
from database.models import (
    SeriesORM,
    ArtistORM,
    RoleORM,
    ComicBookORM,
    ComicBookArtistORM,
)
from repositories.comic_books_repository import ComicBooksRepository, single_or_none
from core.exceptions import MultipleMatchesException, NotFoundException
from tests.conftest import count_rows


class TestComicBooksRepositoryRead:
    """Tests for reading comic books."""

    def test_get_with_related_entities(self, context: Context, comic_book: ComicBookORM):
        repo = ComicBooksRepository(context)

        found = repo.get(comic_book.id)

        assert found is not None
        assert found.series.title == "The Amazing Spider-Man"
        credits = {(c.artist.name, c.role.name) for c in found.artists}
        assert credits == {("Stan Lee", "Script"), ("Steve Ditko", "Pencils")}

    def test_get_without_related_entities(self, context: Context, comic_book: ComicBookORM):
        repo = ComicBooksRepository(context)

        found = repo.get(comic_book.id, include_related_entities=False)

        assert found.series.title == "The Amazing Spider-Man"
        assert "artists" in inspect(found).unloaded

    def test_get_nonexistent(self, context: Context, comic_book: ComicBookORM):
        assert ComicBooksRepository(context).get(999) is None

    def test_get_or_fail_nonexistent(self, context: Context):
        with pytest.raises(NotFoundException) as exc_info:
            ComicBooksRepository(context).get_or_fail(999)

        assert exc_info.value.status_code == 404

    def test_get_list_orders_by_series_then_issue(
        self,
        context: Context,
        comic_book: ComicBookORM,
        bone_issues: Dict[int, ComicBookORM]
    ):
        listed = ComicBooksRepository(context).get_list()

        assert [cb.display_text for cb in listed] == [
            "Bone #1",
            "Bone #2",
            "The Amazing Spider-Man #1",
        ]

    def test_get_count(
        self,
        context: Context,
        comic_book: ComicBookORM,
        bone_issues: Dict[int, ComicBookORM]
    ):
        assert ComicBooksRepository(context).get_count() == 3

    def test_exists(self, context: Context, comic_book: ComicBookORM):
        repo = ComicBooksRepository(context)

        assert repo.exists(comic_book.id) is True
        assert repo.exists(999) is False

    def test_more_than_one_match_is_fatal(self, context: Context, series: Dict[str, SeriesORM]):
        with pytest.raises(MultipleMatchesException) as exc_info:
            single_or_none(context.series, "Series", 1)

        assert exc_info.value.status_code == 500


class TestComicBooksRepositoryCreate:
    """Tests for adding comic books."""

    def test_add_with_loaded_related_entities(
        self,
        context: Context,
        db_session: Session,
        series: Dict[str, SeriesORM],
        artists: Dict[str, ArtistORM],
        roles: Dict[str, RoleORM]
    ):
        repo = ComicBooksRepository(context)
        bone = context.series.filter(SeriesORM.id == series["bone"].id).one()
        artist = context.artists.filter(ArtistORM.id == artists["Jack Kirby"].id).one()
        role = context.roles.filter(RoleORM.id == roles["Inks"].id).one()

        comic_book = ComicBookORM(series=bone, issue_number=1)
        comic_book.add_artist(artist, role)
        created = repo.add(comic_book)

        assert created.id is not None
        assert count_rows(db_session, SeriesORM) == 2
        assert count_rows(db_session, ArtistORM) == 3
        assert count_rows(db_session, RoleORM) == 3
        assert count_rows(db_session, ComicBookArtistORM) == 1

    def test_add_with_tagged_existing_entities(
        self,
        context: Context,
        db_session: Session,
        series: Dict[str, SeriesORM],
        artists: Dict[str, ArtistORM],
        roles: Dict[str, RoleORM]
    ):
        repo = ComicBooksRepository(context)
        comic_book = ComicBookORM(
            series=SeriesORM(id=series["bone"].id).mark_existing(),
            issue_number=4,
        )
        comic_book.add_artist(
            ArtistORM(id=artists["Jack Kirby"].id).mark_existing(),
            RoleORM(id=roles["Pencils"].id).mark_existing(),
        )

        repo.add(comic_book)

        assert count_rows(db_session, SeriesORM) == 2
        assert count_rows(db_session, ArtistORM) == 3
        assert count_rows(db_session, RoleORM) == 3
        credit = db_session.query(ComicBookArtistORM).one()
        assert credit.artist_id == artists["Jack Kirby"].id
        assert credit.role_id == roles["Pencils"].id

    def test_add_inserts_new_artist_once(
        self,
        context: Context,
        db_session: Session,
        series: Dict[str, SeriesORM],
        roles: Dict[str, RoleORM]
    ):
        repo = ComicBooksRepository(context)
        newcomer = ArtistORM(name="Jeff Smith")
        comic_book = ComicBookORM(
            series=SeriesORM(id=series["bone"].id).mark_existing(),
            issue_number=1,
        )
        comic_book.add_artist(newcomer, RoleORM(id=roles["Script"].id).mark_existing())
        comic_book.add_artist(newcomer, RoleORM(id=roles["Pencils"].id).mark_existing())

        repo.add(comic_book)

        assert newcomer.id is not None
        assert db_session.query(ArtistORM).filter(ArtistORM.name == "Jeff Smith").count() == 1
        assert count_rows(db_session, ComicBookArtistORM) == 2


class TestComicBooksRepositoryUpdate:
    """Tests for the blind overwrite update."""

    def test_update_overwrites_every_column(
        self,
        context: Context,
        db_session: Session,
        comic_book: ComicBookORM
    ):
        repo = ComicBooksRepository(context)

        repo.update(ComicBookORM(
            id=comic_book.id,
            series_id=comic_book.series_id,
            issue_number=1,
            average_rating=9.5,
        ))

        db_session.expire_all()
        stored = db_session.get(ComicBookORM, comic_book.id)
        assert stored.average_rating == 9.5
        assert stored.description is None
        assert stored.published_on is None
        assert count_rows(db_session, ComicBookArtistORM) == 2


class TestComicBooksRepositoryDelete:
    """Tests for deleting comic books."""

    def test_delete(self, context: Context, db_session: Session, comic_book: ComicBookORM):
        repo = ComicBooksRepository(context)

        repo.delete(comic_book.id)

        assert repo.get(comic_book.id) is None
        assert count_rows(db_session, ComicBookArtistORM) == 0
        assert count_rows(db_session, SeriesORM) == 2

    def test_delete_nonexistent(self, context: Context, comic_book: ComicBookORM):
        with pytest.raises(NotFoundException):
            ComicBooksRepository(context).delete(999)


class TestComicBooksRepositoryValidation:
    """Tests for the validation queries."""

    def test_series_has_issue_number(self, context: Context, comic_book: ComicBookORM):
        repo = ComicBooksRepository(context)

        assert repo.series_has_issue_number(None, comic_book.series_id, 1) is True
        assert repo.series_has_issue_number(None, comic_book.series_id, 2) is False

    def test_series_has_issue_number_ignores_itself(
        self,
        context: Context,
        comic_book: ComicBookORM
    ):
        repo = ComicBooksRepository(context)

        assert repo.series_has_issue_number(comic_book.id, comic_book.series_id, 1) is False
