from __future__ import annotations

from focusforge.application.dto.auth import AuthUserOutput
from focusforge.application.ports.user_repository_port import UserRepositoryPort
from focusforge.domain.exceptions import UserNotFoundError

from .auth_common import build_auth_user_output


class GetCurrentUserUseCase:
    def __init__(self, *, user_repository: UserRepositoryPort):
        self._user_repository = user_repository

    def execute(self, *, user_id: str) -> AuthUserOutput:
        user = self._user_repository.get_user_by_id(user_id=user_id)
        if user is None:
            raise UserNotFoundError("User not found")
        return build_auth_user_output(user)
