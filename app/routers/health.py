"""
Health Router

`/healthz` answers as long as the process is up. `/readyz` answers 503
until the database responds and the court registry has entries; a
missing OpenAI key is reported but does not block readiness, because
uploads then degrade to "stored without analysis".
"""

import asyncio
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.core.config import Settings, get_settings
from app.core.database import get_db_session
from app.dependencies import get_registry
from app.services.courts.registry import CourtRegistry

router = APIRouter(tags=["Health"])

DB_PROBE_TIMEOUT_SECONDS = 5.0

_started_at = time.monotonic()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def probe_database() -> tuple[bool, dict]:
    began = time.perf_counter()
    try:
        async with get_db_session() as session:
            await asyncio.wait_for(session.execute(text("SELECT 1")), DB_PROBE_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        return False, {"database_error": f"no answer within {DB_PROBE_TIMEOUT_SECONDS:g}s"}
    except Exception as e:
        return False, {"database_error": str(e)}
    return True, {"database_latency_ms": round((time.perf_counter() - began) * 1000, 2)}


@router.get("/healthz")
async def health_check():
    return {"status": "ok", "timestamp": _now()}


@router.get("/readyz")
async def readiness_check(
    settings: Settings = Depends(get_settings),
    registry: CourtRegistry = Depends(get_registry),
):
    database_ok, details = await probe_database()
    details["courts_loaded"] = len(registry)

    checks = {
        "database": database_ok,
        "court_registry": len(registry) > 0,
        "ai_configured": bool(settings.openai_api_key),
    }
    ready = checks["database"] and checks["court_registry"]

    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "degraded",
            "timestamp": _now(),
            "uptime_seconds": round(time.monotonic() - _started_at, 1),
            "version": settings.app_version,
            "checks": checks,
            "details": details,
        },
    )
