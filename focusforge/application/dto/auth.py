from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AuthUserOutput:
    id: str
    email: str
    full_name: str
    avatar_url: str | None
    google_id: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class RegisterUserInput:
    email: str
    full_name: str
    password: str | None
    google_id: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True)
class LoginUserInput:
    email: str
    password: str


@dataclass(frozen=True)
class LogoutInput:
    token: str


@dataclass(frozen=True)
class AuthResultOutput:
    user: AuthUserOutput
    token: str


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: str
    issued_at: datetime
    expires_at: datetime
    token_id: str | None = None
