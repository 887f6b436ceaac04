from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Engine

from focusforge.application.use_cases.get_current_user import GetCurrentUserUseCase
from focusforge.application.use_cases.login_user import LoginUserUseCase
from focusforge.application.use_cases.logout_user import LogoutUserUseCase
from focusforge.application.use_cases.register_user import RegisterUserUseCase
from focusforge.core.db import get_engine
from focusforge.infrastructure.db.repositories.users_repository import SqlUsersRepository
from focusforge.infrastructure.security.auth_service import JwtAuthService
from focusforge.infrastructure.security.password_hasher import PasswordHasher
from focusforge.infrastructure.security.token_revocation_store import InMemoryTokenRevocationStore
from focusforge.infrastructure.security.token_service import JwtTokenService
from focusforge.shared.config import Settings


@dataclass(frozen=True)
class Container:
    settings: Settings
    engine: Engine
    user_repository: SqlUsersRepository
    revocation_store: InMemoryTokenRevocationStore
    auth_service: JwtAuthService
    register_user_use_case: RegisterUserUseCase
    login_user_use_case: LoginUserUseCase
    logout_user_use_case: LogoutUserUseCase
    get_current_user_use_case: GetCurrentUserUseCase


def build_container(settings: Settings, *, engine: Engine | None = None) -> Container:
    engine = engine if engine is not None else get_engine(settings.database_url)
    user_repository = SqlUsersRepository(engine)
    revocation_store = InMemoryTokenRevocationStore(
        compaction_interval_seconds=settings.token_revocation_compaction_seconds,
    )
    auth_service = JwtAuthService(
        password_hasher=PasswordHasher(rounds=settings.password_hash_rounds),
        token_service=JwtTokenService(
            jwt_secret=settings.jwt_secret,
            ttl_seconds=settings.jwt_expires_in_seconds,
        ),
        revocation_store=revocation_store,
    )
    return Container(
        settings=settings,
        engine=engine,
        user_repository=user_repository,
        revocation_store=revocation_store,
        auth_service=auth_service,
        register_user_use_case=RegisterUserUseCase(
            user_repository=user_repository,
            auth_service=auth_service,
        ),
        login_user_use_case=LoginUserUseCase(
            user_repository=user_repository,
            auth_service=auth_service,
        ),
        logout_user_use_case=LogoutUserUseCase(auth_service=auth_service),
        get_current_user_use_case=GetCurrentUserUseCase(user_repository=user_repository),
    )
