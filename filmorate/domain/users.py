"""User entity, its partial-update payload and field rules."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from filmorate.domain.fields import UNSET, is_present

EMAIL_RE = re.compile(r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*$")
LOGIN_RE = re.compile(r"^\S+$")


def is_valid_email(value: str | None) -> bool:
    if not value or not value.strip():
        return False
    return bool(EMAIL_RE.fullmatch(value))


def is_valid_login(value: str | None) -> bool:
    """Login must be non-empty and contain no whitespace."""
    if not value:
        return False
    return bool(LOGIN_RE.fullmatch(value))


def is_valid_birthday(value: date | None, today: date | None = None) -> bool:
    """Birthday must be strictly in the past."""
    if value is None:
        return False
    return value < (today or date.today())


def _blank(value: Any) -> bool:
    return value is UNSET or value is None or not str(value).strip()


@dataclass
class User:
    email: str
    login: str
    birthday: date
    name: Optional[str] = None
    id: Optional[int] = None
    friends: set[int] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.friends = set(self.friends or ())

    def ensure_display_name(self) -> None:
        """A blank display name collapses to the login."""
        if _blank(self.name):
            self.name = self.login

    def add_friend(self, friend_id: int) -> None:
        self.friends.add(friend_id)

    def delete_friend(self, friend_id: int) -> None:
        self.friends.discard(friend_id)

    def apply(self, update: "UserUpdate") -> None:
        """Merge ``update`` onto this user.

        email, login and birthday are replaced when supplied.  The name is
        always re-derived: a blank or missing name resets it to the
        (possibly just updated) login.
        """
        for name in ("email", "login", "birthday"):
            value = getattr(update, name)
            if is_present(value):
                setattr(self, name, value)
        if _blank(update.name):
            self.name = self.login
        else:
            self.name = update.name


@dataclass
class UserUpdate:
    """Partial update: fields left as UNSET are not touched (except name, see User.apply)."""

    id: Optional[int]
    email: Any = UNSET
    login: Any = UNSET
    name: Any = UNSET
    birthday: Any = UNSET
