"""
Unidad de trabajo sobre una sesión de SQLAlchemy.

Un ``Context`` es dueño de una sesión durante una única operación lógica.
Expone una consulta por tipo de entidad y las operaciones de seguimiento de
cambios que necesitan los repositorios:

- ``add``: inserta una entidad nueva (en cascada a sus instancias relacionadas)
- ``mark_unchanged``: registra una fila existente sin insertarla ni actualizarla
- ``mark_modified``: reasocia una entidad desconectada y sobrescribe todas sus columnas
- ``remove``: elimina una fila a partir de un stub que solo lleva el id
- ``save_changes``: flush y commit

Aquí no se reintenta ni se traduce ningún error del almacén: se registra en
el log, se hace rollback y la excepción original se propaga.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Type, TypeVar

from sqlalchemy import delete, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import MANYTOONE, Query, Session, make_transient_to_detached
from sqlalchemy.orm.attributes import flag_modified, set_committed_value

from core.exceptions import NotFoundException, ValidationException
from .db import SessionLocal
from .models import (
    SeriesORM,
    ArtistORM,
    RoleORM,
    ComicBookORM,
    ComicBookArtistORM,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')


def entity_name(entity_or_class: Any) -> str:
    """Nombre legible de la entidad ("ComicBook" para ComicBookORM)."""
    cls = entity_or_class if isinstance(entity_or_class, type) else type(entity_or_class)
    return cls.__name__.removesuffix("ORM")


def _identity(entity: Any) -> tuple:
    mapper = inspect(entity).mapper
    identity = tuple(mapper.primary_key_from_instance(entity))
    if any(value is None for value in identity):
        raise ValidationException(
            f"{entity_name(entity)} requiere un id para esta operación",
            field="id",
        )
    return identity


def _copy_reference_keys(entity: Any) -> None:
    """
    Copia el id de cada referencia muchos-a-uno cargada a su columna de clave foránea.

    Raises:
        ValidationException: Si la referencia todavía no tiene id
    """
    state = inspect(entity)
    for relationship in state.mapper.relationships:
        if relationship.direction is not MANYTOONE:
            continue
        related = state.dict.get(relationship.key)
        if related is None:
            continue
        related_state = inspect(related)
        for local, remote in relationship.local_remote_pairs:
            value = related_state.dict.get(
                related_state.mapper.get_property_by_column(remote).key
            )
            if value is None:
                raise ValidationException(
                    f"{entity_name(related)} debe existir antes de referenciarse en una actualización",
                    field=relationship.key,
                )
            setattr(entity, state.mapper.get_property_by_column(local).key, value)


class Context:
    """
    Unidad de trabajo que envuelve una única sesión de SQLAlchemy.

    Úsese como context manager para que la sesión se libere en cualquier
    salida::

        with Context() as context:
            context.add(comic_book)
            context.save_changes()
    """

    def __init__(self, session: Optional[Session] = None):
        """
        Args:
            session: Sesión a envolver. Si se omite se abre una nueva desde
                la fábrica de sesiones de la aplicación.
        """
        self.session = session if session is not None else SessionLocal()
        self._pending_deletes: List[Any] = []

    # ==================== Colecciones ====================

    def set(self, model: Type[T]) -> Query:
        """Consulta sobre cualquier tipo de entidad mapeada."""
        return self.session.query(model)

    @property
    def comic_books(self) -> Query:
        return self.set(ComicBookORM)

    @property
    def series(self) -> Query:
        return self.set(SeriesORM)

    @property
    def artists(self) -> Query:
        return self.set(ArtistORM)

    @property
    def roles(self) -> Query:
        return self.set(RoleORM)

    @property
    def comic_book_artists(self) -> Query:
        return self.set(ComicBookArtistORM)

    # ==================== Seguimiento de cambios ====================

    def add(self, entity: Any) -> None:
        """Registra una entidad nueva (y sus instancias relacionadas) para insertar."""
        self.session.add(entity)

    def mark_unchanged(self, entity: Any) -> None:
        """
        Sigue una entidad como fila existente y sin modificar.

        La entidad queda persistente en esta sesión sin cambios pendientes:
        nunca se inserta ni se actualiza, pero las relaciones que apuntan a
        ella sí se escriben.

        Raises:
            ValidationException: Si la entidad no tiene id
        """
        state = inspect(entity)
        _identity(entity)
        if state.pending:
            # llegó por una cascada save-update; se deshace el INSERT pendiente
            self.session.expunge(entity)
        if state.transient:
            make_transient_to_detached(entity)
        elif state.detached:
            for attr in state.mapper.column_attrs:
                attr_state = state.attrs[attr.key]
                if attr_state.history.has_changes():
                    set_committed_value(entity, attr.key, attr_state.value)
        self.session.add(entity)

    def mark_modified(self, entity: Any) -> None:
        """
        Reasocia una entidad y marca como cambiadas todas las columnas que no son clave.

        Es una sobrescritura ciega: el siguiente flush emite un UPDATE que
        asigna a cada columna el valor que tiene ``entity``. Las columnas que
        el llamador nunca asignó se escriben como NULL; no se mezcla nada con
        la fila almacenada. Las referencias muchos-a-uno cargadas (por
        ejemplo ``series``) deciden su clave foránea. Actualizar un id sin
        fila lanza ``StaleDataError`` de SQLAlchemy en el flush.

        Raises:
            ValidationException: Si la entidad o una referencia no tiene id
        """
        state = inspect(entity)
        _identity(entity)
        mapper = state.mapper
        _copy_reference_keys(entity)
        if state.pending:
            self.session.expunge(entity)
        if state.transient:
            for attr in mapper.column_attrs:
                setattr(entity, attr.key, getattr(entity, attr.key))
            make_transient_to_detached(entity)
        self.session.add(entity)

        key_names = {mapper.get_property_by_column(column).key for column in mapper.primary_key}
        for attr in mapper.column_attrs:
            if attr.key in key_names or attr.key in state.unloaded:
                continue
            flag_modified(entity, attr.key)

    def remove(self, entity: Any) -> None:
        """
        Programa la eliminación de la fila identificada por ``entity``.

        Solo se lee la clave primaria de ``entity``; la fila nunca se carga.
        El DELETE se ejecuta en ``save_changes``.

        Raises:
            ValidationException: Si la entidad no tiene id
        """
        _identity(entity)
        self._pending_deletes.append(entity)

    def save_changes(self) -> None:
        """
        Hace flush de los cambios pendientes y commit.

        Raises:
            NotFoundException: Si un delete programado no encontró ninguna fila
            SQLAlchemyError: Cualquier fallo del almacén, sin traducir
        """
        try:
            for entity in self._pending_deletes:
                self._delete_row(entity)
            self.session.commit()
        except NotFoundException:
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error saving changes: {e}")
            self.session.rollback()
            raise
        finally:
            self._pending_deletes.clear()

    def _delete_row(self, entity: Any) -> None:
        mapper = inspect(entity).mapper
        identity = _identity(entity)
        criteria = [column == value for column, value in zip(mapper.primary_key, identity)]
        result = self.session.execute(delete(mapper.local_table).where(*criteria))
        if result.rowcount == 0:
            raise NotFoundException(
                resource=entity_name(entity),
                identifier=", ".join(str(value) for value in identity),
            )
        logger.debug(f"Deleted {entity_name(entity)} {identity}")

    # ==================== Ciclo de vida ====================

    def rollback(self) -> None:
        """Revierte la transacción actual."""
        self._pending_deletes.clear()
        self.session.rollback()

    def close(self) -> None:
        """Libera la sesión y su conexión."""
        self._pending_deletes.clear()
        self.session.close()

    def __enter__(self) -> "Context":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is not None:
                self.rollback()
        finally:
            self.close()


@contextmanager
def unit_of_work() -> Iterator[Context]:
    """
    Abre un Context para exactamente una operación lógica.

    Hace rollback ante errores del almacén y siempre libera la sesión.

    Yields:
        Context: Una unidad de trabajo nueva
    """
    context = Context()
    try:
        yield context
    except SQLAlchemyError as e:
        logger.error(f"Database error in unit of work: {e}")
        context.rollback()
        raise
    finally:
        context.close()
