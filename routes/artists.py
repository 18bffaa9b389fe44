"""
Rutas para artistas y roles (Controllers).
"""

from fastapi import APIRouter, Depends
from typing import List

from models.artists import Artist, ArtistDetail, Role
from repositories.artists_repository import ArtistsRepository, RolesRepository
from dependencies import get_artists_repository, get_roles_repository
from routes.common import handle_service_exception

router = APIRouter(prefix="/artists", tags=["artists"])
roles_router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("/", response_model=List[Artist])
async def list_artists(
    repository: ArtistsRepository = Depends(get_artists_repository),
):
    """Lista todos los artistas ordenados por nombre."""
    try:
        return [Artist.model_validate(a) for a in repository.get_list()]
    except Exception as e:
        raise handle_service_exception(e)


@router.get("/{artist_id}", response_model=ArtistDetail)
async def get_artist(
    artist_id: int,
    repository: ArtistsRepository = Depends(get_artists_repository),
):
    """Obtiene un artista con todos sus créditos (cómic y rol)."""
    try:
        return ArtistDetail.model_validate(repository.get_or_fail(artist_id))
    except Exception as e:
        raise handle_service_exception(e)


@roles_router.get("/", response_model=List[Role])
async def list_roles(
    repository: RolesRepository = Depends(get_roles_repository),
):
    """Lista todos los roles ordenados por nombre."""
    try:
        return [Role.model_validate(r) for r in repository.get_list()]
    except Exception as e:
        raise handle_service_exception(e)
