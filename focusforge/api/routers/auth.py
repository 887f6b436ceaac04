from __future__ import annotations

import re

from fastapi import APIRouter, Depends, HTTPException

from focusforge.api.deps import (
    get_current_claims,
    get_get_current_user_use_case,
    get_login_user_use_case,
    get_logout_user_use_case,
    get_register_user_use_case,
    require_bearer_token,
)
from focusforge.api.schemas.auth import (
    AuthResultData,
    AuthResultResponse,
    AuthUserResponse,
    CurrentUserResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
)
from focusforge.application.dto.auth import (
    AuthResultOutput,
    AuthUserOutput,
    LoginUserInput,
    LogoutInput,
    RegisterUserInput,
    TokenClaims,
)
from focusforge.application.use_cases.get_current_user import GetCurrentUserUseCase
from focusforge.application.use_cases.login_user import LoginUserUseCase
from focusforge.application.use_cases.logout_user import LogoutUserUseCase
from focusforge.application.use_cases.register_user import RegisterUserUseCase
from focusforge.domain.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserNotFoundError,
    ValidationError,
)


router = APIRouter(prefix="/auth", tags=["auth"])

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def _user_response(user: AuthUserOutput) -> AuthUserResponse:
    return AuthUserResponse(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        avatar_url=user.avatar_url,
        google_id=user.google_id,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def _auth_result_response(message: str, output: AuthResultOutput) -> AuthResultResponse:
    return AuthResultResponse(
        message=message,
        data=AuthResultData(user=_user_response(output.user), token=output.token),
    )


@router.post("/register", response_model=AuthResultResponse, status_code=201)
def register_user(
    req: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    if not req.email or not req.full_name or not req.password:
        raise HTTPException(status_code=400, detail="Email, fullName, and password are required")
    if not EMAIL_RE.match(req.email):
        raise HTTPException(status_code=400, detail="Invalid email format")
    if len(req.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )

    try:
        output = use_case.execute(
            RegisterUserInput(
                email=req.email,
                full_name=req.full_name,
                password=req.password,
            )
        )
    except ConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return _auth_result_response("User registered successfully", output)


@router.post("/login", response_model=AuthResultResponse)
def login_user(
    req: LoginRequest,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
):
    if not req.email or not req.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    try:
        output = use_case.execute(LoginUserInput(email=req.email, password=req.password))
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    return _auth_result_response("Login successful", output)


@router.post("/logout", response_model=MessageResponse)
def logout_user(
    token: str = Depends(require_bearer_token),
    use_case: LogoutUserUseCase = Depends(get_logout_user_use_case),
):
    try:
        use_case.execute(LogoutInput(token=token))
    except InvalidTokenError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    return MessageResponse(message="Logout successful")


@router.get("/me", response_model=CurrentUserResponse)
def get_current_user(
    claims: TokenClaims = Depends(get_current_claims),
    use_case: GetCurrentUserUseCase = Depends(get_get_current_user_use_case),
):
    try:
        output = use_case.execute(user_id=claims.user_id)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    return CurrentUserResponse(
        message="Current user retrieved successfully",
        data=_user_response(output),
    )
