from __future__ import annotations

from focusforge.application.dto.auth import AuthResultOutput, LoginUserInput
from focusforge.application.ports.auth_service_port import AuthServicePort
from focusforge.application.ports.user_repository_port import UserRepositoryPort
from focusforge.domain.exceptions import InvalidCredentialsError

from .auth_common import issue_auth_result, normalize_email


INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class LoginUserUseCase:
    def __init__(
        self,
        *,
        user_repository: UserRepositoryPort,
        auth_service: AuthServicePort,
    ):
        self._user_repository = user_repository
        self._auth_service = auth_service

    def execute(self, command: LoginUserInput) -> AuthResultOutput:
        user = self._user_repository.get_user_by_email(email=normalize_email(command.email))
        if user is None:
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        # Accounts created through an identity provider have no password.
        if not user.password_hash:
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        if not self._auth_service.compare_password(command.password, user.password_hash):
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        return issue_auth_result(user=user, auth_service=self._auth_service)
