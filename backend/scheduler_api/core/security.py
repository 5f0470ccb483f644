"""Session token issuing and bearer header parsing.

Tokens are opaque random strings stored on the account row.  There is no
token table and no expiry: a token stays valid until the account logs out,
logs in again (which replaces it) or is deleted.
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING, Optional

from scheduler_api.models import User

if TYPE_CHECKING:
    from scheduler_api.services.store import RecordStore

TOKEN_BYTES = 32
BEARER_PREFIX = "Bearer "


def generate_token() -> str:
    """Return 256 bits of randomness, hex encoded."""
    return secrets.token_hex(TOKEN_BYTES)


def issue_token(store: RecordStore, user_id: str) -> str:
    """Give ``user_id`` a fresh token, silently replacing any previous one."""
    token = generate_token()
    store.update(User, User.id == user_id, values={"token": token})
    return token


def revoke_token(store: RecordStore, user_id: str) -> None:
    """Clear the stored token; revoking twice is not an error."""
    store.update(User, User.id == user_id, values={"token": None})


def parse_bearer(header: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` value.

    The scheme is case sensitive and must be followed by exactly one space.
    Returns ``None`` for anything malformed.
    """
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):]
    if not token or token != token.strip():
        return None
    return token
