"""
Capa de servicios para la lógica de negocio.
Este paquete contiene las clases service que aplican las reglas de la
biblioteca y orquestan operaciones entre repositorios.
"""

from .comic_book_service import ComicBookService

__all__ = [
    "ComicBookService",
]
