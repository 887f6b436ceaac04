from __future__ import annotations

from datetime import datetime, timezone

from focusforge.application.dto.auth import AuthResultOutput, AuthUserOutput
from focusforge.application.ports.auth_service_port import AuthServicePort
from focusforge.domain.entities.user import User


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def build_auth_user_output(user: User) -> AuthUserOutput:
    return AuthUserOutput(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        avatar_url=user.avatar_url,
        google_id=user.google_id,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def issue_auth_result(*, user: User, auth_service: AuthServicePort) -> AuthResultOutput:
    token = auth_service.generate_token(user)
    return AuthResultOutput(user=build_auth_user_output(user), token=token)
