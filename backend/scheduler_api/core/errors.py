"""Error taxonomy shared by every resource route.

Every operation either succeeds or ends in exactly one ``ErrorKind``.
Routes raise the ``ServiceError`` subclasses below; the exception
handlers installed in ``main.create_application`` turn them into an HTTP
status plus a ``{"code": ..., "message": ...}`` body.  Store failures are
classified by ``classify_store_error`` before they leave the record store.
"""

from __future__ import annotations

import enum

from fastapi import status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError


class ErrorKind(str, enum.Enum):
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    INTERNAL = "INTERNAL"


HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Constraint names the users.email uniqueness violation shows up under
# (SQLite reports the column, PostgreSQL the index).
EMAIL_CONSTRAINT_MARKERS = ("users.email", "ix_users_email", "users_email_key")


class ServiceError(Exception):
    """Base class for failures reported to callers."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]

    def to_dict(self) -> dict[str, str]:
        return {"code": self.kind.value, "message": self.message}


class InvalidArgument(ServiceError):
    kind = ErrorKind.INVALID_ARGUMENT
    default_message = "Invalid argument"


class Unauthenticated(ServiceError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Unauthorized: Authentication failed"


class PermissionDenied(ServiceError):
    kind = ErrorKind.PERMISSION_DENIED
    default_message = "Forbidden: You can only access or modify your own data"


class NotFound(ServiceError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class AlreadyExists(ServiceError):
    kind = ErrorKind.ALREADY_EXISTS
    default_message = "Already exists"


class InternalError(ServiceError):
    kind = ErrorKind.INTERNAL
    default_message = "Database error"


def classify_store_error(exc: SQLAlchemyError) -> ServiceError:
    """Map a store exception onto the taxonomy.

    Only the account email uniqueness violation is recognised; anything
    else becomes INTERNAL with a generic message so storage details never
    reach the caller.
    """
    if isinstance(exc, IntegrityError):
        detail = str(exc.orig) if exc.orig is not None else str(exc)
        if any(marker in detail for marker in EMAIL_CONSTRAINT_MARKERS):
            return AlreadyExists("Email already in use")
    return InternalError()
