"""
Pydantic models for user data.

``name`` is optional everywhere: a missing or blank name is replaced by
the login in the service layer.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import Field, field_validator

from filmorate.domain.users import User, UserUpdate, is_valid_birthday, is_valid_email, is_valid_login
from filmorate.schemas.base import CamelModel


def _check_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not is_valid_email(value):
        raise ValueError("Invalid email format")
    return value


def _check_login(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_valid_login(value):
        raise ValueError("Login must not be empty or contain whitespace")
    return value


def _check_birthday(value: Optional[date]) -> Optional[date]:
    if value is not None and not is_valid_birthday(value):
        raise ValueError("Birthday must be in the past")
    return value


class UserCreate(CamelModel):
    email: str = Field(..., examples=["bob@example.com"])
    login: str = Field(..., examples=["bob"])
    name: Optional[str] = None
    birthday: date

    @field_validator("email")
    @classmethod
    def email_is_valid(cls, value):
        return _check_email(value)

    @field_validator("login")
    @classmethod
    def login_has_no_whitespace(cls, value):
        return _check_login(value)

    @field_validator("birthday")
    @classmethod
    def birthday_in_past(cls, value):
        return _check_birthday(value)

    def to_entity(self) -> User:
        return User(email=self.email, login=self.login, name=self.name, birthday=self.birthday)


class UserUpdateRequest(CamelModel):
    id: int
    email: Optional[str] = None
    login: Optional[str] = None
    name: Optional[str] = None
    birthday: Optional[date] = None

    @field_validator("email")
    @classmethod
    def email_is_valid(cls, value):
        return _check_email(value)

    @field_validator("login")
    @classmethod
    def login_has_no_whitespace(cls, value):
        return _check_login(value)

    @field_validator("birthday")
    @classmethod
    def birthday_in_past(cls, value):
        return _check_birthday(value)

    def to_update(self) -> UserUpdate:
        return UserUpdate(id=self.id, **self.model_dump(exclude_unset=True, exclude={"id"}))


class UserRead(CamelModel):
    id: int
    email: str
    login: str
    name: Optional[str] = None
    birthday: date
    friends: List[int] = Field(default_factory=list)

    @field_validator("friends", mode="before")
    @classmethod
    def sorted_friends(cls, value):
        return sorted(value or ())

    @classmethod
    def from_entity(cls, user: User) -> "UserRead":
        return cls(
            id=user.id,
            email=user.email,
            login=user.login,
            name=user.name,
            birthday=user.birthday,
            friends=user.friends,
        )
