from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    id: str
    email: str
    full_name: str
    avatar_url: str | None
    password_hash: str | None
    google_id: str | None
    created_at: datetime
    updated_at: datetime
