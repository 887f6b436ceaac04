from __future__ import annotations

from focusforge.application.dto.auth import TokenClaims
from focusforge.application.ports.auth_service_port import AuthServicePort
from focusforge.application.ports.password_hasher_port import PasswordHasherPort
from focusforge.application.ports.token_port import TokenPort
from focusforge.application.ports.token_revocation_port import TokenRevocationPort
from focusforge.domain.entities.user import User


class JwtAuthService(AuthServicePort):
    def __init__(
        self,
        *,
        password_hasher: PasswordHasherPort,
        token_service: TokenPort,
        revocation_store: TokenRevocationPort,
    ):
        self._password_hasher = password_hasher
        self._token_service = token_service
        self._revocation_store = revocation_store

    def hash_password(self, password: str) -> str:
        return self._password_hasher.hash(password)

    def compare_password(self, password: str, password_hash: str) -> bool:
        return self._password_hasher.verify(password, password_hash)

    def generate_token(self, user: User) -> str:
        return self._token_service.create_token(user=user)

    def verify_token(self, token: str) -> TokenClaims | None:
        # Signature and expiry first, the revocation lookup only for survivors.
        claims = self._token_service.decode_token(token=token)
        if claims is None:
            return None
        if self._revocation_store.is_revoked(token):
            return None
        return claims

    def invalidate_token(self, token: str) -> None:
        claims = self._token_service.decode_token(token=token)
        if claims is None:
            # Already rejected by signature or expiry.
            return
        self._revocation_store.revoke(token, expires_at=claims.expires_at)

    def is_token_invalid(self, token: str) -> bool:
        return self._revocation_store.is_revoked(token)
