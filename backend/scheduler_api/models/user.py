from __future__ import annotations

from typing import Optional
from uuid import uuid4

from sqlmodel import Field, SQLModel


def new_id() -> str:
    return str(uuid4())


class User(SQLModel, table=True):
    """Account record.

    ``password`` is stored as supplied and ``token`` holds the single live
    session token (NULL when logged out).
    """

    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    name: str = Field(max_length=255)
    # Case-sensitive uniqueness: "A@x.io" and "a@x.io" are distinct accounts.
    email: str = Field(index=True, unique=True, max_length=255)
    password: str = Field(max_length=255)
    timezone: Optional[str] = Field(default=None, max_length=64)
    token: Optional[str] = Field(default=None, index=True, max_length=128)
