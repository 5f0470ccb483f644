from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from .pagination import Pagination


class UserCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    timezone: Optional[str] = None


class UserUpdate(BaseModel):
    """Partial update; empty strings count as not supplied."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    timezone: Optional[str] = None

    def changes(self) -> dict[str, str]:
        return {field: value for field, value in self.model_dump().items() if value}


class UserRead(BaseModel):
    """Account as returned to callers; the password is never included."""

    id: str
    name: str
    email: str
    timezone: str = ""

    @classmethod
    def from_user(cls, user) -> UserRead:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            timezone=user.timezone or "",
        )


class UserListResponse(BaseModel):
    users: list[UserRead]
    pagination: Pagination
