from .config import settings
from .security import issue_token, parse_bearer, revoke_token

__all__ = [
    "settings",
    "issue_token",
    "parse_bearer",
    "revoke_token",
]
