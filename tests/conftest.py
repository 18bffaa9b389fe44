"""
Pytest fixtures.

This module holds the reusable fixtures of the test suite: an in-memory
database bound to the application's session factory, seeded catalogue
rows and an API test client.
"""

import pytest
import os
from datetime import date
from typing import Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Use an in-memory database for the tests
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from main import app
from database.db import SessionLocal, enable_sqlite_foreign_keys, engine as app_engine
from database.context import Context
from database.models import (
    Base,
    SeriesORM,
    ArtistORM,
    RoleORM,
    ComicBookORM,
)


# ==================== Database Fixtures ====================

@pytest.fixture(scope="function")
def db_engine() -> Generator[Engine, None, None]:
    """Create an in-memory SQLite engine and bind the session factory to it.

    Every Context opened by the code under test (per call or per request)
    runs against this engine.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    Base.metadata.create_all(bind=engine)
    SessionLocal.configure(bind=engine)
    yield engine
    SessionLocal.configure(bind=app_engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine: Engine) -> Generator[Session, None, None]:
    """Session used to seed and inspect the database."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def context(db_engine: Engine) -> Generator[Context, None, None]:
    """A unit of work for repository tests."""
    ctx = Context()
    try:
        yield ctx
    finally:
        ctx.close()


@pytest.fixture(scope="function")
def client(db_engine: Engine) -> Generator[TestClient, None, None]:
    """API test client; requests open their Context on the test engine."""
    with TestClient(app) as test_client:
        yield test_client


# ==================== Catalogue Fixtures ====================

@pytest.fixture
def roles(db_session: Session) -> Dict[str, RoleORM]:
    """Seed the roles."""
    roles = {name: RoleORM(name=name) for name in ("Script", "Pencils", "Inks")}
    db_session.add_all(roles.values())
    db_session.commit()
    return roles


@pytest.fixture
def artists(db_session: Session) -> Dict[str, ArtistORM]:
    """Seed the artists."""
    artists = {
        name: ArtistORM(name=name)
        for name in ("Stan Lee", "Steve Ditko", "Jack Kirby")
    }
    db_session.add_all(artists.values())
    db_session.commit()
    return artists


@pytest.fixture
def series(db_session: Session) -> Dict[str, SeriesORM]:
    """Seed two series."""
    series = {
        "spider-man": SeriesORM(
            title="The Amazing Spider-Man",
            description="Peter Parker, bitten by a radioactive spider.",
        ),
        "bone": SeriesORM(title="Bone"),
    }
    db_session.add_all(series.values())
    db_session.commit()
    return series


@pytest.fixture
def comic_book(
    db_session: Session,
    series: Dict[str, SeriesORM],
    artists: Dict[str, ArtistORM],
    roles: Dict[str, RoleORM],
) -> ComicBookORM:
    """Seed The Amazing Spider-Man #1 with two credits."""
    comic_book = ComicBookORM(
        series=series["spider-man"],
        issue_number=1,
        description="Spider-Man meets the Fantastic Four.",
        published_on=date(1963, 3, 1),
        average_rating=7.1,
    )
    comic_book.add_artist(artists["Stan Lee"], roles["Script"])
    comic_book.add_artist(artists["Steve Ditko"], roles["Pencils"])
    db_session.add(comic_book)
    db_session.commit()
    return comic_book


@pytest.fixture
def bone_issues(db_session: Session, series: Dict[str, SeriesORM]) -> Dict[int, ComicBookORM]:
    """Seed Bone #2 and Bone #1, inserted out of order."""
    issues = {
        number: ComicBookORM(series=series["bone"], issue_number=number)
        for number in (2, 1)
    }
    db_session.add_all(issues.values())
    db_session.commit()
    return issues


# ==================== Helpers ====================

def count_rows(session: Session, model) -> int:
    """Count the rows of a table straight from the store."""
    return session.query(model).count()
