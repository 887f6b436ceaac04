from __future__ import annotations

import logging

from focusforge.application.dto.auth import LogoutInput
from focusforge.application.ports.auth_service_port import AuthServicePort
from focusforge.domain.exceptions import InvalidTokenError


logger = logging.getLogger(__name__)


class LogoutUserUseCase:
    def __init__(self, *, auth_service: AuthServicePort):
        self._auth_service = auth_service

    def execute(self, command: LogoutInput) -> None:
        claims = self._auth_service.verify_token(command.token)
        if claims is None:
            raise InvalidTokenError("Invalid token")

        self._auth_service.invalidate_token(command.token)
        logger.info("User %s logged out", claims.user_id)
