"""Film entity, its partial-update payload and field rules."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from filmorate.domain.fields import UNSET, is_present

CINEMA_BIRTHDAY = date(1895, 12, 28)
DESCRIPTION_MAX_LENGTH = 200


def is_valid_release_date(value: date | None) -> bool:
    """Films cannot predate the first public screening."""
    return value is not None and value >= CINEMA_BIRTHDAY


def is_valid_description(value: str | None) -> bool:
    return value is None or len(value) <= DESCRIPTION_MAX_LENGTH


@dataclass
class Film:
    name: str
    release_date: date
    duration: int
    description: Optional[str] = None
    id: Optional[int] = None
    likes: set[int] = field(default_factory=set)

    def __post_init__(self) -> None:
        # likes is never None; no likes is the empty set
        self.likes = set(self.likes or ())

    @property
    def likes_count(self) -> int:
        return len(self.likes)

    def add_like(self, user_id: int) -> bool:
        """Add a like; returns False when the user already liked the film."""
        if user_id in self.likes:
            return False
        self.likes.add(user_id)
        return True

    def delete_like(self, user_id: int) -> bool:
        if user_id not in self.likes:
            return False
        self.likes.discard(user_id)
        return True

    def apply(self, update: "FilmUpdate") -> None:
        """Overwrite every field supplied with a non-null value in ``update``."""
        for name in ("name", "description", "release_date", "duration"):
            value = getattr(update, name)
            if is_present(value):
                setattr(self, name, value)


@dataclass
class FilmUpdate:
    """Partial update: fields left as UNSET are not touched."""

    id: Optional[int]
    name: Any = UNSET
    description: Any = UNSET
    release_date: Any = UNSET
    duration: Any = UNSET


def popularity_key(film: Film) -> tuple[int, int]:
    """Sort key: like-count descending, then identifier ascending."""
    return (-film.likes_count, film.id)


def rank_by_popularity(films, count: int) -> list[Film]:
    """Return the ``count`` most liked films in deterministic order."""
    return sorted(films, key=popularity_key)[:count]
