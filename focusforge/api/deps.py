from __future__ import annotations

from fastapi import Depends, Header, HTTPException, Request

from focusforge.api.container import Container
from focusforge.application.dto.auth import TokenClaims
from focusforge.application.ports.auth_service_port import AuthServicePort
from focusforge.application.use_cases.get_current_user import GetCurrentUserUseCase
from focusforge.application.use_cases.login_user import LoginUserUseCase
from focusforge.application.use_cases.logout_user import LogoutUserUseCase
from focusforge.application.use_cases.register_user import RegisterUserUseCase


BEARER_PREFIX = "Bearer "


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_auth_service(container: Container = Depends(get_container)) -> AuthServicePort:
    return container.auth_service


def get_register_user_use_case(container: Container = Depends(get_container)) -> RegisterUserUseCase:
    return container.register_user_use_case


def get_login_user_use_case(container: Container = Depends(get_container)) -> LoginUserUseCase:
    return container.login_user_use_case


def get_logout_user_use_case(container: Container = Depends(get_container)) -> LogoutUserUseCase:
    return container.logout_user_use_case


def get_get_current_user_use_case(
    container: Container = Depends(get_container),
) -> GetCurrentUserUseCase:
    return container.get_current_user_use_case


def require_bearer_token(authorization: str | None = Header(default=None)) -> str:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise HTTPException(status_code=401, detail="Access token is required")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Access token is required")
    return token


def get_current_claims(
    request: Request,
    token: str = Depends(require_bearer_token),
    auth_service: AuthServicePort = Depends(get_auth_service),
) -> TokenClaims:
    claims = auth_service.verify_token(token)
    if claims is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    request.state.user = claims
    return claims
