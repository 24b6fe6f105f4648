from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Request, Response, status

from filmorate.schemas.user import UserCreate, UserRead, UserUpdateRequest
from filmorate.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService not configured")
    return svc


@router.get("", response_model=List[UserRead])
def list_users(request: Request):
    users = _get_user_service(request).get_all()
    logger.info("Listing %s users", len(users))
    return [UserRead.from_entity(u) for u in users]


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, request: Request):
    logger.info("Request to add user with email=%s", payload.email)
    user = _get_user_service(request).add(payload.to_entity())
    return UserRead.from_entity(user)


@router.put("", response_model=UserRead)
def update_user(payload: UserUpdateRequest, request: Request):
    logger.info("Request to update user id=%s", payload.id)
    user = _get_user_service(request).update(payload.to_update())
    return UserRead.from_entity(user)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, request: Request):
    return UserRead.from_entity(_get_user_service(request).get_by_id(user_id))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, request: Request):
    logger.info("Request to delete user id=%s", user_id)
    _get_user_service(request).delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{user_id}/friends/{friend_id}", response_model=UserRead)
def add_friend(user_id: int, friend_id: int, request: Request):
    svc = _get_user_service(request)
    svc.add_friend(user_id, friend_id)
    return UserRead.from_entity(svc.get_by_id(user_id))


@router.delete("/{user_id}/friends/{friend_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_friend(user_id: int, friend_id: int, request: Request):
    _get_user_service(request).delete_friend(user_id, friend_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}/friends", response_model=List[UserRead])
def list_friends(user_id: int, request: Request):
    return [UserRead.from_entity(u) for u in _get_user_service(request).get_friends(user_id)]


@router.get("/{user_id}/friends/common/{other_id}", response_model=List[UserRead])
def common_friends(user_id: int, other_id: int, request: Request):
    return [UserRead.from_entity(u) for u in _get_user_service(request).get_common_friends(user_id, other_id)]
