from __future__ import annotations

from datetime import datetime
from typing import Protocol


class TokenRevocationPort(Protocol):
    def revoke(self, token: str, *, expires_at: datetime) -> None:
        ...

    def is_revoked(self, token: str) -> bool:
        ...
