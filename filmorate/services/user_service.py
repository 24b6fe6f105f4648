"""User use cases: CRUD and the friendship graph.

Friendship is symmetric.  Every mutation of an edge updates both users
while holding the service lock, so no caller observes a half-written edge.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

from filmorate.core.errors import InvalidArgumentError, NotFoundError, UserNotFoundError
from filmorate.domain.users import User, UserUpdate
from filmorate.repositories.memory_storage import IdGenerator, InMemoryStorage

logger = logging.getLogger(__name__)


class UserService:
    """Orchestrates the user store and owns the friendship mutation protocol."""

    def __init__(self, storage: InMemoryStorage[User], id_generator: Optional[IdGenerator] = None) -> None:
        self.storage = storage
        self.id_generator = id_generator or IdGenerator()
        self._lock = threading.Lock()

    # -------------------------- helpers --------------------------
    def _get_or_raise(self, user_id: Optional[int]) -> User:
        user = self.storage.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User with id={user_id} not found")
        return user

    def _resolve(self, ids: Iterable[int]) -> list[User]:
        # ids that no longer resolve are dropped
        users = (self.storage.get_by_id(i) for i in ids)
        return sorted((u for u in users if u is not None), key=lambda u: u.id)

    # -------------------------- crud --------------------------
    def get_all(self) -> list[User]:
        return self.storage.get_all()

    def get_by_id(self, user_id: Optional[int]) -> User:
        return self._get_or_raise(user_id)

    def add(self, user: User) -> User:
        if user is None:
            raise InvalidArgumentError("User must not be null")
        user.ensure_display_name()
        with self._lock:
            user.id = self.id_generator.next_id()
            stored = self.storage.add(user)
        logger.info("Added user %r with id=%s", stored.name, stored.id)
        return stored

    def update(self, updated: UserUpdate) -> User:
        if updated is None:
            raise InvalidArgumentError("User update must not be null")
        with self._lock:
            existing = self.storage.get_by_id(updated.id)
            if existing is None:
                logger.warning("Attempt to update missing user id=%s", updated.id)
                raise UserNotFoundError(f"User with id={updated.id} not found")
            existing.apply(updated)
            stored = self.storage.update(existing)
        logger.info("Updated user %r with id=%s", stored.name, stored.id)
        return stored

    def delete(self, user_id: Optional[int]) -> None:
        with self._lock:
            user = self.storage.get_by_id(user_id)
            if user is None:
                raise UserNotFoundError(f"User with id={user_id} not found")
            for friend in self._resolve(user.friends):
                friend.delete_friend(user_id)
                self.storage.update(friend)
            try:
                self.storage.delete(user_id)
            except NotFoundError as exc:
                raise UserNotFoundError(f"User with id={user_id} not found") from exc
        logger.info("Deleted user id=%s", user_id)

    # -------------------------- friends --------------------------
    def add_friend(self, user_id: int, friend_id: int) -> None:
        if user_id == friend_id:
            raise InvalidArgumentError("A user cannot befriend themselves")
        with self._lock:
            user = self._get_or_raise(user_id)
            friend = self._get_or_raise(friend_id)
            if friend_id in user.friends and user_id in friend.friends:
                logger.warning("User id=%s is already a friend of user id=%s", friend_id, user_id)
                return
            user.add_friend(friend_id)
            friend.add_friend(user_id)
            self.storage.update(user)
            self.storage.update(friend)
        logger.info("User id=%s befriended user id=%s", user_id, friend_id)

    def delete_friend(self, user_id: int, friend_id: int) -> None:
        with self._lock:
            user = self._get_or_raise(user_id)
            friend = self._get_or_raise(friend_id)
            user.delete_friend(friend_id)
            friend.delete_friend(user_id)
            self.storage.update(user)
            self.storage.update(friend)
        logger.info("User id=%s unfriended user id=%s", user_id, friend_id)

    def get_friends(self, user_id: int) -> list[User]:
        user = self._get_or_raise(user_id)
        friends = self._resolve(user.friends)
        logger.info("Found %s friends for user id=%s", len(friends), user_id)
        return friends

    def get_common_friends(self, user_id: int, other_id: int) -> list[User]:
        user = self._get_or_raise(user_id)
        other = self._get_or_raise(other_id)
        common = self._resolve(user.friends & other.friends)
        logger.info("Found %s common friends for users id=%s and id=%s", len(common), user_id, other_id)
        return common
