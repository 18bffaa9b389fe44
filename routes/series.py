"""
Rutas para series (Controllers).
"""

from fastapi import APIRouter, Depends
from typing import List

from models.series import Series, SeriesDetail
from repositories.series_repository import SeriesRepository
from dependencies import get_series_repository
from routes.common import handle_service_exception

router = APIRouter(prefix="/series", tags=["series"])


@router.get("/", response_model=List[Series])
async def list_series(
    repository: SeriesRepository = Depends(get_series_repository),
):
    """Lista todas las series ordenadas por título."""
    try:
        return [Series.model_validate(s) for s in repository.get_list()]
    except Exception as e:
        raise handle_service_exception(e)


@router.get("/{series_id}", response_model=SeriesDetail)
async def get_series(
    series_id: int,
    repository: SeriesRepository = Depends(get_series_repository),
):
    """Obtiene una serie con sus cómics, por número."""
    try:
        return SeriesDetail.model_validate(repository.get_or_fail(series_id))
    except Exception as e:
        raise handle_service_exception(e)
