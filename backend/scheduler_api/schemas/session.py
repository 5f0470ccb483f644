from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    token: str


class LogoutResponse(BaseModel):
    message: str
