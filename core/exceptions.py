"""
Excepciones personalizadas para la aplicación.

Estas excepciones permiten reportar errores de acceso a datos y de
validación de forma estructurada y mapearlos a códigos HTTP en la capa de
API. Los fallos del almacén (``IntegrityError`` de SQLAlchemy y similares)
no se envuelven aquí: se propagan al llamador sin traducir.
"""

from typing import Optional, Any


class AppException(Exception):
    """Excepción base para todos los errores de la aplicación."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundException(AppException):
    """Se lanza cuando un recurso no existe."""

    def __init__(
        self,
        resource: str,
        identifier: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"{resource} no encontrado"
        if identifier:
            message += f": {identifier}"
        super().__init__(message=message, status_code=404, details=details)


class ValidationException(AppException):
    """Se lanza cuando los datos de entrada no son válidos."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if field:
            details = details or {}
            details["field"] = field
        super().__init__(message=message, status_code=422, details=details)


class DuplicateException(AppException):
    """Se lanza al crear un recurso que ya existe."""

    def __init__(
        self,
        resource: str,
        field: Optional[str] = None,
        value: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"{resource} ya existe"
        if field and value:
            message += f": {field}='{value}'"
        super().__init__(message=message, status_code=400, details=details)


class MultipleMatchesException(AppException):
    """Se lanza cuando una búsqueda de una sola fila encuentra más de una.

    Los ids son únicos, así que esto indica un almacén corrupto. Es un error
    fatal y nunca se recupera.
    """

    def __init__(
        self,
        resource: str,
        identifier: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"Más de un {resource} coincide"
        if identifier:
            message += f": {identifier}"
        super().__init__(message=message, status_code=500, details=details)
