from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    email: str | None = None
    full_name: str | None = None
    password: str | None = None


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class AuthUserResponse(CamelModel):
    id: str
    email: str
    full_name: str
    avatar_url: str | None = None
    google_id: str | None = None
    created_at: datetime
    updated_at: datetime


class AuthResultData(CamelModel):
    user: AuthUserResponse
    token: str


class AuthResultResponse(CamelModel):
    message: str
    data: AuthResultData


class CurrentUserResponse(CamelModel):
    message: str
    data: AuthUserResponse


class MessageResponse(CamelModel):
    message: str
