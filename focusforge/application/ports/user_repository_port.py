from __future__ import annotations

from datetime import datetime
from typing import Protocol

from focusforge.domain.entities.user import User


class UserRepositoryPort(Protocol):
    def create_user(
        self,
        *,
        user_id: str,
        email: str,
        full_name: str,
        password_hash: str | None,
        google_id: str | None,
        avatar_url: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> User:
        ...

    def get_user_by_id(self, *, user_id: str) -> User | None:
        ...

    def get_user_by_email(self, *, email: str) -> User | None:
        ...

    def get_user_by_google_id(self, *, google_id: str) -> User | None:
        ...

    def update_user(
        self,
        *,
        user_id: str,
        full_name: str | None = None,
        avatar_url: str | None = None,
    ) -> User:
        ...

    def delete_user(self, *, user_id: str) -> None:
        ...
