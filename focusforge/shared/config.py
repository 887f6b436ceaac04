from __future__ import annotations

import os
import re
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


load_dotenv()


ENVIRONMENTS = ("development", "production", "test")
MIN_JWT_SECRET_LENGTH = 32
MAX_JWT_EXPIRES_IN_SECONDS = 365 * 24 * 60 * 60

_DURATION_UNITS = {"s": 1, "m": 60, "h": 60 * 60, "d": 24 * 60 * 60}
_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")


class ConfigError(ValueError):
    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("Invalid environment variables: " + "; ".join(problems))


def parse_duration_seconds(value: str) -> int:
    """Parse ``"3600"``, ``"15m"``, ``"12h"`` or ``"7d"`` into seconds."""
    match = _DURATION_RE.match(value)
    if match is None:
        raise ValueError(f"invalid duration: {value!r}")
    amount, unit = match.groups()
    return int(amount) * _DURATION_UNITS[unit or "s"]


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    jwt_secret: str
    jwt_expires_in_seconds: int
    token_revocation_compaction_seconds: int
    password_hash_rounds: int
    rate_limit_window_ms: int
    rate_limit_max_requests: int
    port: int
    environment: str
    log_level: str
    db_create_schema: bool

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"

    @property
    def cors_origins(self) -> list[str]:
        if self.is_development:
            return ["http://localhost:3000", "http://localhost:3001"]
        return []


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Read and validate settings, reporting every problem at once."""
    source = os.environ if environ is None else environ
    problems: list[str] = []

    def get(name: str, default: str | None = None) -> str | None:
        return source.get(name, default)

    def get_int(name: str, default: str, *, minimum: int = 1, maximum: int | None = None) -> int:
        raw = get(name, default)
        try:
            value = int(raw)
        except (TypeError, ValueError):
            problems.append(f"{name} must be an integer")
            return int(default)
        if value < minimum or (maximum is not None and value > maximum):
            bounds = f">= {minimum}" if maximum is None else f"between {minimum} and {maximum}"
            problems.append(f"{name} must be {bounds}")
        return value

    database_url = get("DATABASE_URL", "") or ""
    if not database_url:
        problems.append("DATABASE_URL is required")

    jwt_secret = get("JWT_SECRET", "") or ""
    if len(jwt_secret) < MIN_JWT_SECRET_LENGTH:
        problems.append(f"JWT_SECRET must be at least {MIN_JWT_SECRET_LENGTH} characters")

    jwt_expires_in = get("JWT_EXPIRES_IN", "7d") or "7d"
    try:
        jwt_expires_in_seconds = parse_duration_seconds(jwt_expires_in)
        if jwt_expires_in_seconds <= 0:
            problems.append("JWT_EXPIRES_IN must be positive")
        elif jwt_expires_in_seconds > MAX_JWT_EXPIRES_IN_SECONDS:
            problems.append("JWT_EXPIRES_IN must not exceed 365d")
    except ValueError:
        problems.append("JWT_EXPIRES_IN must be a duration such as 3600, 15m, 12h or 7d")
        jwt_expires_in_seconds = 0

    environment = (get("APP_ENV") or get("NODE_ENV") or "development").strip().lower()
    if environment not in ENVIRONMENTS:
        problems.append(f"NODE_ENV must be one of {', '.join(ENVIRONMENTS)}")

    settings = Settings(
        database_url=database_url,
        jwt_secret=jwt_secret,
        jwt_expires_in_seconds=jwt_expires_in_seconds,
        token_revocation_compaction_seconds=get_int("TOKEN_REVOCATION_COMPACTION_SECONDS", "3600"),
        password_hash_rounds=get_int("PASSWORD_HASH_ROUNDS", "12", minimum=4, maximum=31),
        rate_limit_window_ms=get_int("RATE_LIMIT_WINDOW_MS", "900000"),
        rate_limit_max_requests=get_int("RATE_LIMIT_MAX_REQUESTS", "100"),
        port=get_int("PORT", "3000", maximum=65535),
        environment=environment,
        log_level=(get("LOG_LEVEL", "INFO") or "INFO").upper(),
        db_create_schema=_parse_bool(get("DB_CREATE_SCHEMA", "false") or "false"),
    )
    if problems:
        raise ConfigError(problems)
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
