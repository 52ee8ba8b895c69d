"""Health check endpoints"""
import time
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.api.deps import get_history, get_ledger_store, get_users
from app.config import settings
from app.utils.auth import UserDirectory

router = APIRouter(prefix="/health", tags=["health"])

# Track startup time
STARTUP_TIME = time.time()


@router.get("")
def health_check():
    """
    Basic health check endpoint

    Returns 200 if service is running
    """
    return {
        "status": "healthy",
        "service": "AgriAdvisor",
        "version": "0.1.0",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/ready")
def readiness_check() -> Dict[str, Any]:
    """
    Readiness check

    With the database ledger backend the database must answer ``SELECT 1``;
    the memory backend is always ready. Returns 503 when not ready.
    """
    checks: Dict[str, Any] = {"ledger_backend": settings.LEDGER_BACKEND}

    if settings.uses_database:
        from app.database import SessionLocal

        try:
            start = time.time()
            with SessionLocal() as db:
                db.execute(text("SELECT 1"))
            checks["database"] = True
            checks["database_latency_ms"] = round((time.time() - start) * 1000, 2)
        except Exception as e:
            checks["database"] = False
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "unhealthy",
                    "checks": checks,
                    "message": f"Database check failed: {str(e)}"
                },
            )

    return {
        "status": "ready",
        "checks": checks,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/live")
def liveness_check():
    """
    Liveness check - verifies service is alive

    Returns 200 if process is alive
    """
    return {
        "status": "alive",
        "uptime_seconds": round(time.time() - STARTUP_TIME, 2),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/stats")
def health_stats(
    ledger=Depends(get_ledger_store),
    history: List[Dict[str, Any]] = Depends(get_history),
    users: UserDirectory = Depends(get_users),
) -> Dict[str, Any]:
    """
    In-memory state counters

    Returns:
    - Ledger size, backend and hash mode
    - Recommendations served since startup
    - Registered users
    """
    return {
        "status": "healthy",
        "ledger": {
            "entries": len(ledger),
            "backend": ledger.backend,
            "hash_mode": ledger.hasher.name
        },
        "recommendations_served": len(history),
        "users": len(users),
        "system": {
            "uptime_seconds": round(time.time() - STARTUP_TIME, 2),
            "environment": settings.HOST
        },
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
