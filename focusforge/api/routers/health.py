from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from focusforge.api.container import Container
from focusforge.api.deps import get_container


router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(container: Container = Depends(get_container)):
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": container.settings.environment,
    }
