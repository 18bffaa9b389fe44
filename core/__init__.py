""" Componentes compartidos para la aplicación.

Este paquete contiene:

- Excepciones personalizadas
- Utilidades de ordenamiento para columnas de texto
"""

from .exceptions import (
    AppException,
    NotFoundException,
    ValidationException,
    DuplicateException,
    MultipleMatchesException,
)
from .ordering import text_ordering

__all__ = [
    # Excepciones
    "AppException",
    "NotFoundException",
    "ValidationException",
    "DuplicateException",
    "MultipleMatchesException",
    # ordenamiento
    "text_ordering",
]
