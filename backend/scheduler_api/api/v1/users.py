from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Response, status

from scheduler_api.api.deps import CurrentUser
from scheduler_api.core.config import settings
from scheduler_api.core.errors import InvalidArgument
from scheduler_api.core.validators import is_valid_email
from scheduler_api.models import User
from scheduler_api.schemas import (
    Pagination,
    UserCreate,
    UserListResponse,
    UserRead,
    UserUpdate,
)
from scheduler_api.services.permissions import ACCOUNTS
from scheduler_api.services.store import RecordStore, StoreDep

logger = logging.getLogger(__name__)

router = APIRouter()


def create_account(store: RecordStore, payload: UserCreate) -> User:
    """Validate and insert a new account.

    Shared with ``scripts/create_user.py`` so both paths enforce the same
    rules.  A duplicate email surfaces as ALREADY_EXISTS from the store.
    """
    if not payload.name or not payload.email or not payload.password:
        raise InvalidArgument("Name, email, and password are required")
    if not is_valid_email(payload.email):
        raise InvalidArgument("Invalid email format")

    user = store.insert(
        User(
            name=payload.name,
            email=payload.email,
            password=payload.password,
            timezone=payload.timezone or None,
        )
    )
    logger.info("Created account %s", user.id)
    return user


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
)
def create_user(payload: UserCreate, store: StoreDep) -> UserRead:
    return UserRead.from_user(create_account(store, payload))


@router.get("", response_model=UserListResponse, summary="List accounts")
def list_users(
    store: StoreDep,
    current_user: CurrentUser,
    page: int = Query(default=1),
    page_size: int = Query(default=settings.DEFAULT_PAGE_SIZE),
) -> UserListResponse:
    if page < 1 or page_size < 1:
        raise InvalidArgument("page and page_size must be positive")

    users = store.scan(
        User,
        order_by=User.id,
        limit=page_size,
        offset=(page - 1) * page_size,
    )
    return UserListResponse(
        users=[UserRead.from_user(user) for user in users],
        # total mirrors the returned page, not the whole table.
        pagination=Pagination(page=page, page_size=page_size, total=len(users)),
    )


@router.get("/me", response_model=UserRead, summary="Get current account profile")
def get_current_user_profile(current_user: CurrentUser) -> UserRead:
    return UserRead.from_user(current_user)


@router.get("/{user_id}", response_model=UserRead, summary="Get account by id")
def get_user(user_id: str, store: StoreDep, current_user: CurrentUser) -> UserRead:
    return UserRead.from_user(ACCOUNTS.locate(store, user_id))


@router.patch("/{user_id}", response_model=UserRead, summary="Update own account")
def update_user(
    user_id: str,
    payload: UserUpdate,
    store: StoreDep,
    current_user: CurrentUser,
) -> UserRead:
    changes = payload.changes()
    if not changes:
        raise InvalidArgument("At least one field is required")
    if "email" in changes and not is_valid_email(changes["email"]):
        raise InvalidArgument("Invalid email format")

    ACCOUNTS.require_owner(store, user_id, current_user)

    if store.update(User, User.id == user_id, values=changes) == 0:
        raise ACCOUNTS.not_found()
    return UserRead.from_user(ACCOUNTS.locate(store, user_id))


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete own account",
)
def delete_user(user_id: str, store: StoreDep, current_user: CurrentUser) -> Response:
    ACCOUNTS.require_owner(store, user_id, current_user, action="delete")

    # Owned events, schedules and appointments are left in place.
    if store.delete(User, User.id == user_id) == 0:
        raise ACCOUNTS.not_found()
    logger.info("Deleted account %s", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
