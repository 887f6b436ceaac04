from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, bindparam, text
from sqlalchemy.exc import IntegrityError

from focusforge.application.ports.user_repository_port import UserRepositoryPort
from focusforge.domain.entities.user import User
from focusforge.domain.exceptions import EmailAlreadyExistsError, UserNotFoundError
from focusforge.infrastructure.db.mappers.users_mapper import map_row_to_user


logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, email, full_name, avatar_url, password_hash, google_id, created_at, updated_at"

_USER_COLUMN_TYPES = {
    "id": String(36),
    "email": Text(),
    "full_name": Text(),
    "avatar_url": Text(),
    "password_hash": Text(),
    "google_id": Text(),
    "created_at": DateTime(timezone=True),
    "updated_at": DateTime(timezone=True),
}


def _select_user(where: str):
    sql = f"""
        SELECT {_USER_COLUMNS}
        FROM users
        WHERE {where}
        LIMIT 1
    """
    return text(sql).columns(**_USER_COLUMN_TYPES)


def _timestamp(name: str):
    return bindparam(name, type_=DateTime(timezone=True))


class SqlUsersRepository(UserRepositoryPort):
    def __init__(self, engine):
        self._engine = engine

    def _fetch_one(self, conn, where: str, params: dict) -> User | None:
        row = conn.execute(_select_user(where), params).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row)

    def get_user_by_id(self, *, user_id: str) -> User | None:
        with self._engine.connect() as conn:
            return self._fetch_one(conn, "id = :user_id", {"user_id": user_id})

    def get_user_by_email(self, *, email: str) -> User | None:
        with self._engine.connect() as conn:
            return self._fetch_one(conn, "lower(email) = :email", {"email": email.lower()})

    def get_user_by_google_id(self, *, google_id: str) -> User | None:
        with self._engine.connect() as conn:
            return self._fetch_one(conn, "google_id = :google_id", {"google_id": google_id})

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
        sql = """
            INSERT INTO users (
                id, email, full_name, avatar_url, password_hash, google_id, created_at, updated_at
            ) VALUES (
                :id, :email, :full_name, :avatar_url, :password_hash, :google_id, :created_at, :updated_at
            )
        """
        stmt = text(sql).bindparams(_timestamp("created_at"), _timestamp("updated_at"))
        params = {
            "id": user_id,
            "email": email,
            "full_name": full_name,
            "avatar_url": avatar_url,
            "password_hash": password_hash,
            "google_id": google_id,
            "created_at": created_at,
            "updated_at": updated_at,
        }
        try:
            with self._engine.begin() as conn:
                conn.execute(stmt, params)
                user = self._fetch_one(conn, "id = :user_id", {"user_id": user_id})
        except IntegrityError as exc:
            logger.info("Rejected duplicate user %s", email)
            raise EmailAlreadyExistsError("User with this email already exists") from exc
        if user is None:
            raise RuntimeError(f"User {user_id} missing right after insert.")
        return user

    def update_user(
        self,
        *,
        user_id: str,
        full_name: str | None = None,
        avatar_url: str | None = None,
    ) -> User:
        assignments = ["updated_at = :updated_at"]
        params: dict = {"user_id": user_id, "updated_at": datetime.now(timezone.utc)}
        if full_name is not None:
            assignments.append("full_name = :full_name")
            params["full_name"] = full_name
        if avatar_url is not None:
            assignments.append("avatar_url = :avatar_url")
            params["avatar_url"] = avatar_url

        sql = f"""
            UPDATE users
            SET {", ".join(assignments)}
            WHERE id = :user_id
        """
        stmt = text(sql).bindparams(_timestamp("updated_at"))
        with self._engine.begin() as conn:
            result = conn.execute(stmt, params)
            if result.rowcount == 0:
                raise UserNotFoundError("User not found")
            user = self._fetch_one(conn, "id = :user_id", {"user_id": user_id})
        if user is None:
            raise UserNotFoundError("User not found")
        return user

    def delete_user(self, *, user_id: str) -> None:
        sql = """
            DELETE FROM users
            WHERE id = :user_id
        """
        with self._engine.begin() as conn:
            conn.execute(text(sql), {"user_id": user_id})
