from __future__ import annotations

from typing import Protocol

from focusforge.application.dto.auth import TokenClaims
from focusforge.domain.entities.user import User


class AuthServicePort(Protocol):
    def hash_password(self, password: str) -> str:
        ...

    def compare_password(self, password: str, password_hash: str) -> bool:
        ...

    def generate_token(self, user: User) -> str:
        ...

    def verify_token(self, token: str) -> TokenClaims | None:
        ...

    def invalidate_token(self, token: str) -> None:
        ...

    def is_token_invalid(self, token: str) -> bool:
        ...
