from __future__ import annotations

from datetime import datetime
from typing import Protocol

from focusforge.application.dto.auth import TokenClaims
from focusforge.domain.entities.user import User


class TokenPort(Protocol):
    def create_token(self, *, user: User, now: datetime | None = None) -> str:
        ...

    def decode_token(self, *, token: str) -> TokenClaims | None:
        ...
