from __future__ import annotations

from typing import Any, Mapping

from focusforge.domain.entities.user import User


def _as_str(value: Any) -> str:
    return str(value)


def map_row_to_user(row: Mapping[str, Any]) -> User:
    return User(
        id=_as_str(row["id"]),
        email=row["email"],
        full_name=row["full_name"],
        avatar_url=row.get("avatar_url"),
        password_hash=row.get("password_hash"),
        google_id=row.get("google_id"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
