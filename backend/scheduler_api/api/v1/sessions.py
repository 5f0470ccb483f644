from __future__ import annotations

import logging
import secrets

from fastapi import APIRouter, status

from scheduler_api.api.deps import CurrentUser
from scheduler_api.core.errors import InvalidArgument, Unauthenticated
from scheduler_api.core.security import issue_token, revoke_token
from scheduler_api.models import User
from scheduler_api.schemas import LoginRequest, LoginResponse, LogoutResponse
from scheduler_api.services.store import StoreDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=LoginResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Login and obtain a session token",
)
def login(payload: LoginRequest, store: StoreDep) -> LoginResponse:
    if not payload.email or not payload.password:
        raise InvalidArgument("Email and password are required")

    # Exact, case-sensitive email match.
    user = store.first(User, User.email == payload.email)
    if user is None or not secrets.compare_digest(
        user.password.encode("utf-8"), payload.password.encode("utf-8")
    ):
        logger.info("Failed login attempt")
        raise Unauthenticated("Invalid credentials")

    token = issue_token(store, user.id)
    logger.info("Account %s logged in", user.id)
    return LoginResponse(token=token)


@router.delete("", response_model=LogoutResponse, summary="Logout and invalidate the token")
def logout(store: StoreDep, current_user: CurrentUser) -> LogoutResponse:
    user_id = current_user.id
    revoke_token(store, user_id)
    logger.info("Account %s logged out", user_id)
    return LogoutResponse(message="Logout successful")
