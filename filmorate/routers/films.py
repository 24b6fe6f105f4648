from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Query, Request, Response, status

from filmorate.core.config import get_settings
from filmorate.schemas.film import FilmCreate, FilmRead, FilmUpdateRequest
from filmorate.services.film_service import FilmService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/films", tags=["films"])


def _get_film_service(request: Request) -> FilmService:
    svc = getattr(getattr(request.app, "state", None), "film_service", None)
    if not svc:
        raise RuntimeError("FilmService not configured")
    return svc


@router.get("", response_model=List[FilmRead])
def list_films(request: Request):
    films = _get_film_service(request).get_all()
    logger.info("Listing %s films", len(films))
    return [FilmRead.from_entity(f) for f in films]


@router.post("", response_model=FilmRead, status_code=status.HTTP_201_CREATED)
def create_film(payload: FilmCreate, request: Request):
    logger.info("Request to add film %r", payload.name)
    film = _get_film_service(request).add(payload.to_entity())
    return FilmRead.from_entity(film)


@router.put("", response_model=FilmRead)
def update_film(payload: FilmUpdateRequest, request: Request):
    logger.info("Request to update film id=%s", payload.id)
    film = _get_film_service(request).update(payload.to_update())
    return FilmRead.from_entity(film)


@router.get("/popular", response_model=List[FilmRead])
def most_rated_films(request: Request, count: Optional[int] = Query(None, ge=1)):
    if count is None:
        count = get_settings().popular_default_count
    films = _get_film_service(request).get_most_rated(count)
    logger.info("Top-%s request returned %s films", count, len(films))
    return [FilmRead.from_entity(f) for f in films]


@router.get("/{film_id}", response_model=FilmRead)
def get_film(film_id: int, request: Request):
    return FilmRead.from_entity(_get_film_service(request).get_by_id(film_id))


@router.delete("/{film_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_film(film_id: int, request: Request):
    logger.info("Request to delete film id=%s", film_id)
    _get_film_service(request).delete(film_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{film_id}/like/{user_id}", response_model=FilmRead)
def add_like(film_id: int, user_id: int, request: Request):
    film = _get_film_service(request).add_like(film_id, user_id)
    return FilmRead.from_entity(film)


@router.delete("/{film_id}/like/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_like(film_id: int, user_id: int, request: Request):
    _get_film_service(request).delete_like(film_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
