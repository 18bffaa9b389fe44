"""módulo de base de datos: engine, fábrica de sesiones y creación del esquema."""
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.exc import SQLAlchemyError

# importar models registra cada clase ORM en Base.metadata
from .models import Base

#import configuration
from config import settings

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """Activa las claves foráneas en cada conexión nueva de SQLite.

    SQLite ignora las claves foráneas salvo que se pidan por conexión.
    """
    @event.listens_for(target, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _connect_args() -> dict:
    if settings.is_sqlite:
        return {"check_same_thread": False}
    return {"connect_timeout": 30}


#engine / session con configuración centralizada
engine = create_engine(
    settings.database_url,
    future=True,
    pool_pre_ping=True,  #verifica conexiones antes de usarlas
    connect_args=_connect_args(),
)
if settings.is_sqlite:
    enable_sqlite_foreign_keys(engine)

# expire_on_commit=False: las entidades siguen legibles tras cerrar su unidad de trabajo
SessionLocal = sessionmaker(
    bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
)


def create_tables() -> None:
    """Crea las tablas ORM en la base de datos.

    Raises:
        SQLAlchemyError: Si no se pueden crear las tablas
    """
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created/verified")
    except SQLAlchemyError as e:
        logger.error(f"Error creating tables: {e}", exc_info=True)
        raise


def get_database_url() -> str:
    """Retorna la URL de la base de datos sin credenciales."""
    url = engine.url.render_as_string(hide_password=True)
    if '@' in url:
        return f"***@{url.split('@', 1)[1]}"
    return url
