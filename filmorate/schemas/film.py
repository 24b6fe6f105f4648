"""
Pydantic models for film data.

Field-level rules (non-blank name, description length, release date,
non-negative duration) are enforced here, before the service layer
sees the value.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import Field, field_validator

from filmorate.domain.films import (
    CINEMA_BIRTHDAY,
    DESCRIPTION_MAX_LENGTH,
    Film,
    FilmUpdate,
    is_valid_description,
    is_valid_release_date,
)
from filmorate.schemas.base import CamelModel


def _check_name(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("Name must not be blank")
    return value


def _check_description(value: Optional[str]) -> Optional[str]:
    if not is_valid_description(value):
        raise ValueError(f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters")
    return value


def _check_release_date(value: Optional[date]) -> Optional[date]:
    if value is not None and not is_valid_release_date(value):
        raise ValueError(f"Release date must not be before {CINEMA_BIRTHDAY.isoformat()}")
    return value


class FilmCreate(CamelModel):
    name: str = Field(..., examples=["Metropolis"])
    description: Optional[str] = None
    release_date: date = Field(..., examples=["1927-01-10"])
    duration: int = Field(..., ge=0, description="Duration in minutes")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return _check_name(value)

    @field_validator("description")
    @classmethod
    def description_not_too_long(cls, value):
        return _check_description(value)

    @field_validator("release_date")
    @classmethod
    def release_date_not_too_early(cls, value):
        return _check_release_date(value)

    def to_entity(self) -> Film:
        return Film(
            name=self.name,
            description=self.description,
            release_date=self.release_date,
            duration=self.duration,
        )


class FilmUpdateRequest(CamelModel):
    """Partial replacement; only fields present in the body are merged."""

    id: int
    name: Optional[str] = None
    description: Optional[str] = None
    release_date: Optional[date] = None
    duration: Optional[int] = Field(None, ge=0)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return _check_name(value)

    @field_validator("description")
    @classmethod
    def description_not_too_long(cls, value):
        return _check_description(value)

    @field_validator("release_date")
    @classmethod
    def release_date_not_too_early(cls, value):
        return _check_release_date(value)

    def to_update(self) -> FilmUpdate:
        return FilmUpdate(id=self.id, **self.model_dump(exclude_unset=True, exclude={"id"}))


class FilmRead(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    release_date: date
    duration: int
    likes: List[int] = Field(default_factory=list)

    @field_validator("likes", mode="before")
    @classmethod
    def sorted_likes(cls, value):
        return sorted(value or ())

    @classmethod
    def from_entity(cls, film: Film) -> "FilmRead":
        return cls(
            id=film.id,
            name=film.name,
            description=film.description,
            release_date=film.release_date,
            duration=film.duration,
            likes=film.likes,
        )
