"""Film use cases: CRUD, likes and the popularity ranking."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from filmorate.core.errors import FilmNotFoundError, InvalidArgumentError, NotFoundError
from filmorate.domain.films import Film, FilmUpdate, rank_by_popularity
from filmorate.repositories.memory_storage import IdGenerator, InMemoryStorage
from filmorate.services.user_service import UserService

logger = logging.getLogger(__name__)


class FilmService:
    """Orchestrates the film store; checks user existence through UserService."""

    def __init__(
        self,
        storage: InMemoryStorage[Film],
        user_service: UserService,
        id_generator: Optional[IdGenerator] = None,
    ) -> None:
        self.storage = storage
        self.user_service = user_service
        self.id_generator = id_generator or IdGenerator()
        self._lock = threading.Lock()

    # -------------------------- helpers --------------------------
    def _get_or_raise(self, film_id: Optional[int]) -> Film:
        film = self.storage.get_by_id(film_id)
        if film is None:
            raise FilmNotFoundError(f"Film with id={film_id} not found")
        return film

    # -------------------------- crud --------------------------
    def get_all(self) -> list[Film]:
        return self.storage.get_all()

    def get_by_id(self, film_id: Optional[int]) -> Film:
        return self._get_or_raise(film_id)

    def add(self, film: Film) -> Film:
        if film is None:
            raise InvalidArgumentError("Film must not be null")
        with self._lock:
            film.id = self.id_generator.next_id()
            stored = self.storage.add(film)
        logger.info("Added film %r with id=%s", stored.name, stored.id)
        return stored

    def update(self, updated: FilmUpdate) -> Film:
        if updated is None:
            raise InvalidArgumentError("Film update must not be null")
        with self._lock:
            existing = self.storage.get_by_id(updated.id)
            if existing is None:
                logger.warning("Attempt to update missing film id=%s", updated.id)
                raise FilmNotFoundError(f"Film with id={updated.id} not found")
            existing.apply(updated)
            stored = self.storage.update(existing)
        logger.info("Updated film %r with id=%s", stored.name, stored.id)
        return stored

    def delete(self, film_id: Optional[int]) -> None:
        with self._lock:
            try:
                self.storage.delete(film_id)
            except NotFoundError as exc:
                raise FilmNotFoundError(f"Film with id={film_id} not found") from exc
        logger.info("Deleted film id=%s", film_id)

    # -------------------------- likes --------------------------
    def add_like(self, film_id: int, user_id: int) -> Film:
        with self._lock:
            film = self._get_or_raise(film_id)
            self.user_service.get_by_id(user_id)
            if not film.add_like(user_id):
                logger.info("User id=%s already liked film id=%s", user_id, film_id)
                return film
            film = self.storage.update(film)
        logger.info("User id=%s liked film id=%s", user_id, film_id)
        return film

    def delete_like(self, film_id: int, user_id: int) -> Film:
        with self._lock:
            film = self._get_or_raise(film_id)
            self.user_service.get_by_id(user_id)
            if not film.delete_like(user_id):
                logger.info("User id=%s has no like on film id=%s", user_id, film_id)
                return film
            film = self.storage.update(film)
        logger.info("Removed like of user id=%s from film id=%s", user_id, film_id)
        return film

    # -------------------------- ranking --------------------------
    def get_most_rated(self, count: int) -> list[Film]:
        """Top ``count`` films by likes; ties go to the lower id."""
        if count is None or count < 1:
            raise InvalidArgumentError("count must be a positive number")
        films = self.storage.get_all()
        if count > len(films):
            logger.info("Requested %s films but only %s are stored", count, len(films))
        return rank_by_popularity(films, count)
