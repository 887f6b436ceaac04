from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from focusforge.application.dto.auth import TokenClaims
from focusforge.application.ports.token_port import TokenPort
from focusforge.domain.entities.user import User


JWT_ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL_SECONDS = 7 * 24 * 60 * 60


class JwtTokenService(TokenPort):
    def __init__(
        self,
        *,
        jwt_secret: str,
        ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
    ):
        self._jwt_secret = jwt_secret
        self._ttl_seconds = ttl_seconds

    def create_token(self, *, user: User, now: datetime | None = None) -> str:
        now = now or utcnow()
        exp = now + timedelta(seconds=self._ttl_seconds)
        payload = {
            "sub": user.id,
            "email": user.email,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
            "jti": uuid4().hex,
        }
        return jwt.encode(payload, self._jwt_secret, algorithm=JWT_ALGORITHM)

    def decode_token(self, *, token: str) -> TokenClaims | None:
        """Return the claims of a well-signed, unexpired token, else None.

        Every failure collapses to None so callers cannot tell a bad signature
        from an expired or malformed token.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self._jwt_secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["sub", "email", "iat", "exp"]},
            )
        except jwt.PyJWTError:
            return None

        user_id = payload.get("sub")
        email = payload.get("email")
        if not user_id or not isinstance(user_id, str):
            return None
        if not email or not isinstance(email, str):
            return None

        try:
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError):
            return None

        token_id = payload.get("jti")
        return TokenClaims(
            user_id=user_id,
            email=email,
            issued_at=issued_at,
            expires_at=expires_at,
            token_id=token_id if isinstance(token_id, str) else None,
        )


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
