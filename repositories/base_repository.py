"""
Repositorio base con operaciones CRUD comunes.

Este repositorio genérico provee las operaciones estándar de almacenamiento
compartidas por todos los repositorios de entidades. Trabaja sobre un
``Context`` (unidad de trabajo) inyectado por el llamador; nunca abre un
contexto propio de larga duración.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, List, Optional, Type
import logging

from core.exceptions import NotFoundException
from database.context import Context, entity_name

logger = logging.getLogger(__name__)

T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """
    Repositorio genérico que provee operaciones CRUD estándar.

    Las subclases deciden qué significa "entidades relacionadas" en ``get``
    y cómo se ordena ``get_list``.
    """

    def __init__(self, context: Context, model_class: Type[T]):
        """
        Inicializa el repositorio.

        Args:
            context: Unidad de trabajo sobre la que opera el repositorio
            model_class: Clase ORM que maneja este repositorio
        """
        self.context = context
        self.model_class = model_class

    @property
    def entity_name(self) -> str:
        return entity_name(self.model_class)

    @abstractmethod
    def get(self, id: int, include_related_entities: bool = True) -> Optional[T]:
        """
        Obtiene una entidad por su ID.

        Args:
            id: ID de la entidad
            include_related_entities: Si se cargan de forma anticipada las filas relacionadas

        Returns:
            La entidad o None si no se encuentra
        """

    @abstractmethod
    def get_list(self) -> List[T]:
        """Obtiene todas las entidades, en el orden del repositorio."""

    def get_or_fail(self, id: int, include_related_entities: bool = True) -> T:
        """
        Obtiene una entidad por su ID o lanza excepción si no existe.

        Raises:
            NotFoundException: Si ninguna fila tiene ese id
        """
        entity = self.get(id, include_related_entities=include_related_entities)
        if entity is None:
            raise NotFoundException(resource=self.entity_name, identifier=str(id))
        return entity

    def exists(self, id: int) -> bool:
        """
        Verifica si existe una fila con ese id.

        Cuenta en lugar de cargar, así ninguna instancia entra al mapa de
        identidad del contexto.
        """
        return self.context.set(self.model_class).filter(
            self.model_class.id == id
        ).count() > 0

    def add(self, entity: T) -> T:
        """
        Inserta una entidad nueva y hace commit.

        El id generado queda disponible en ``entity`` al retornar.
        """
        self.context.add(entity)
        self.context.save_changes()
        logger.info(f"Added {self.entity_name} {entity.id}")
        return entity

    def update(self, entity: T) -> T:
        """
        Sobrescribe todas las columnas de la fila almacenada con ``entity`` y hace commit.

        Es una sobrescritura ciega: las columnas que el llamador no asignó se
        escriben como NULL en vez de conservar su valor almacenado.
        """
        self.context.mark_modified(entity)
        self.context.save_changes()
        logger.info(f"Updated {self.entity_name} {entity.id}")
        return entity

    def delete(self, id: int) -> None:
        """
        Elimina la fila con ese id, sin leerla antes, y hace commit.

        Raises:
            NotFoundException: Si ninguna fila tiene ese id
        """
        self.context.remove(self.model_class(id=id))
        self.context.save_changes()
        logger.info(f"Deleted {self.entity_name} {id}")
