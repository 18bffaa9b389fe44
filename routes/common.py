"""
Traducción de errores compartida por los routers.
"""

from fastapi import HTTPException, status
import logging

from core.exceptions import (
    AppException,
    NotFoundException,
    DuplicateException,
    ValidationException,
)

logger = logging.getLogger(__name__)


def handle_service_exception(e: Exception) -> HTTPException:
    """Convierte excepciones de servicios y repositorios en excepciones HTTP."""
    if isinstance(e, NotFoundException):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    elif isinstance(e, ValidationException):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.message
        )
    elif isinstance(e, DuplicateException):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    elif isinstance(e, AppException):
        logger.error(f"Application error: {e.message}")
        return HTTPException(
            status_code=e.status_code,
            detail=e.message
        )
    else:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error interno del servidor"
        )
