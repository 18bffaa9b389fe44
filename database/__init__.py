from .db import (
    SessionLocal,
    create_tables,
    engine,
    enable_sqlite_foreign_keys,
    get_database_url,
)
from .models import (
    Base,
    PersistenceState,
    SeriesORM,
    ArtistORM,
    RoleORM,
    ComicBookORM,
    ComicBookArtistORM,
)
from .context import Context, unit_of_work

__all__ = [
    "SessionLocal",
    "create_tables",
    "engine",
    "enable_sqlite_foreign_keys",
    "get_database_url",
    "Base",
    "PersistenceState",
    "SeriesORM",
    "ArtistORM",
    "RoleORM",
    "ComicBookORM",
    "ComicBookArtistORM",
    "Context",
    "unit_of_work",
]
