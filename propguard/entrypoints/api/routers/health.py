# propguard/entrypoints/api/routers/health.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ..deps import require_api_key
from ....config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/debug/config", dependencies=[Depends(require_api_key)])
def debug_config() -> dict[str, Any]:
    def _redact(v: str | None) -> str | None:
        if not v:
            return v
        if len(v) <= 8:
            return "***"
        return v[:4] + "***" + v[-4:]

    return {
        "ENV": settings.ENV,
        "LOG_LEVEL": settings.LOG_LEVEL,
        "PROPGUARD_DB_URL": settings.PROPGUARD_DB_URL,
        "DEFAULT_COUNTRY": settings.DEFAULT_COUNTRY,
        "ALERT_MESSAGE_MAX_LEN": settings.ALERT_MESSAGE_MAX_LEN,
        "API_KEY": _redact(settings.API_KEY),
    }

