"""Exception hierarchy shared by stores, services and the HTTP boundary."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(CatalogError):
    """Malformed input to a core operation (null id, bad count, self-friendship, duplicate key)."""


class NotFoundError(CatalogError):
    """Requested identifier does not exist in the relevant store."""


class FilmNotFoundError(NotFoundError):
    pass


class UserNotFoundError(NotFoundError):
    pass
