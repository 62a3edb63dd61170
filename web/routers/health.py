"""Health-related API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from database import Database, get_database

router = APIRouter(tags=["Health"])


@router.get("/", summary="Health Check")
def health_check():
    return {"status": "ok", "message": "backend up and running"}


@router.get("/healthz", include_in_schema=False)
def readiness_check(database: Database = Depends(get_database)):
    """Report database connectivity; 503 when the store does not answer."""
    db_error = database.ping()
    payload = {"status": "ok" if db_error is None else "unhealthy", "database": {"ok": db_error is None}}
    if db_error:
        payload["database"]["error"] = db_error
    status_code = status.HTTP_200_OK if db_error is None else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=status_code, content=payload)


__all__ = ["router"]
