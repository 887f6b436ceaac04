from __future__ import annotations

import logging
from uuid import uuid4

from focusforge.application.dto.auth import AuthResultOutput, RegisterUserInput
from focusforge.application.ports.auth_service_port import AuthServicePort
from focusforge.application.ports.user_repository_port import UserRepositoryPort
from focusforge.domain.exceptions import EmailAlreadyExistsError, ValidationError

from .auth_common import issue_auth_result, normalize_email, utcnow


logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        user_repository: UserRepositoryPort,
        auth_service: AuthServicePort,
    ):
        self._user_repository = user_repository
        self._auth_service = auth_service

    def execute(self, command: RegisterUserInput) -> AuthResultOutput:
        email = normalize_email(command.email)
        full_name = command.full_name.strip()

        if not email:
            raise ValidationError("email is required.")
        if not full_name:
            raise ValidationError("fullName is required.")
        if not command.password and not command.google_id:
            # A user without either has no way to log in.
            raise ValidationError("password or google id is required.")

        if self._user_repository.get_user_by_email(email=email) is not None:
            raise EmailAlreadyExistsError("User with this email already exists")

        password_hash = None
        if command.password:
            password_hash = self._auth_service.hash_password(command.password)

        now = utcnow()
        user = self._user_repository.create_user(
            user_id=str(uuid4()),
            email=email,
            full_name=full_name,
            password_hash=password_hash,
            google_id=command.google_id,
            avatar_url=command.avatar_url,
            created_at=now,
            updated_at=now,
        )
        logger.info("Registered user %s", user.id)
        return issue_auth_result(user=user, auth_service=self._auth_service)
