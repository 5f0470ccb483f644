from __future__ import annotations

import logging
from typing import Annotated, Optional

from fastapi import Depends, Header

from scheduler_api.core.errors import Unauthenticated
from scheduler_api.core.security import parse_bearer
from scheduler_api.models import User
from scheduler_api.services.store import StoreDep

logger = logging.getLogger(__name__)


def get_current_user(
    store: StoreDep,
    authorization: Annotated[Optional[str], Header()] = None,
) -> User:
    """Resolve the bearer token to its account.

    Runs before any other check on protected routes.  Unknown, revoked and
    malformed tokens all fail the same way so callers cannot tell them apart.
    The lookup always goes to the store; nothing is cached between requests.
    """
    token = parse_bearer(authorization)
    if token is None:
        logger.info("Rejected request without a usable bearer token")
        raise Unauthenticated("Unauthorized: No token provided")

    user = store.first(User, User.token == token)
    if user is None:
        logger.info("Rejected request with an unknown bearer token")
        raise Unauthenticated("Unauthorized: Invalid token")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
