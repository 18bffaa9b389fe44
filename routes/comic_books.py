"""
Rutas para cómics (Controllers).

Este módulo maneja las peticiones/respuestas HTTP de los endpoints de cómics.
La validación y el mapeo a entidades se delegan a ComicBookService; la
unidad de trabajo de la petición la abren y cierran las dependencias.
"""

from fastapi import APIRouter, HTTPException, Depends, status
from typing import List
import logging

from models.comic_books import ComicBook, ComicBookCreate, ComicBookListItem, ComicBookUpdate
from models.common import CountResponse, DeleteResponse, create_delete_response
from core.exceptions import AppException
from services.comic_book_service import ComicBookService
from dependencies import get_comic_book_service
from routes.common import handle_service_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comic-books", tags=["comic-books"])


@router.get("/", response_model=List[ComicBookListItem])
async def list_comic_books(
    service: ComicBookService = Depends(get_comic_book_service),
):
    """
    Lista todos los cómics, ordenados por título de serie y luego por número.
    """
    try:
        return service.get_comic_books()
    except Exception as e:
        raise handle_service_exception(e)


@router.get("/count", response_model=CountResponse)
async def count_comic_books(
    service: ComicBookService = Depends(get_comic_book_service),
):
    """Retorna el número de cómics."""
    try:
        return CountResponse(count=service.get_comic_book_count())
    except Exception as e:
        raise handle_service_exception(e)


@router.get("/{comic_book_id}", response_model=ComicBook)
async def get_comic_book(
    comic_book_id: int,
    service: ComicBookService = Depends(get_comic_book_service),
):
    """
    Obtiene un cómic con su serie y sus créditos.

    Args:
        comic_book_id: ID del cómic
        service: ComicBookService inyectado

    Returns:
        El cómic, o 404
    """
    try:
        return service.get_comic_book(comic_book_id)
    except Exception as e:
        raise handle_service_exception(e)


@router.post("/", response_model=ComicBook, status_code=status.HTTP_201_CREATED)
async def create_comic_book(
    comic_book: ComicBookCreate,
    service: ComicBookService = Depends(get_comic_book_service),
):
    """
    Crea un cómic.

    La serie, los artistas y los roles deben existir.

    Args:
        comic_book: Datos del cómic con sus créditos
        service: ComicBookService inyectado

    Returns:
        Cómic creado
    """
    try:
        return service.create_comic_book(comic_book)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error creating comic book: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al crear cómic"
        )


@router.put("/{comic_book_id}", response_model=ComicBook)
async def update_comic_book(
    comic_book_id: int,
    comic_book: ComicBookUpdate,
    service: ComicBookService = Depends(get_comic_book_service),
):
    """
    Reemplaza los campos de un cómic.

    Es un reemplazo completo: los campos opcionales omitidos en el body
    se vacían.
    """
    try:
        return service.update_comic_book(comic_book_id, comic_book)
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error updating comic book {comic_book_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al actualizar cómic"
        )


@router.delete("/{comic_book_id}", response_model=DeleteResponse)
async def delete_comic_book(
    comic_book_id: int,
    service: ComicBookService = Depends(get_comic_book_service),
):
    """Elimina un cómic y sus créditos."""
    try:
        service.delete_comic_book(comic_book_id)
        return create_delete_response(
            message="Cómic eliminado",
            deleted_id=comic_book_id,
        )
    except AppException as e:
        raise handle_service_exception(e)
    except Exception as e:
        logger.error(f"Error deleting comic book {comic_book_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al eliminar cómic"
        )
