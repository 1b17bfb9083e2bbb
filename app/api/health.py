"""
Health Check Endpoints

Same contract as the atams health router, but checks the engine owned by
this application (app.state.engine) instead of the atams module-level one.

    GET /health     - Application is running
    GET /health/db  - Database connectivity and pool status
"""
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool

from atams.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _pool_status(engine: Engine) -> Dict[str, Any]:
    pool = engine.pool
    if not isinstance(pool, QueuePool):
        return {"type": type(pool).__name__}
    return {
        "pool_size": pool.size(),
        "checked_in": pool.checkedin(),
        "checked_out": pool.checkedout(),
        "overflow": pool.overflow(),
        "total_connections": pool.checkedout() + pool.checkedin(),
    }


@router.get("", status_code=status.HTTP_200_OK)
def basic_health() -> Dict[str, Any]:
    return {"status": "ok", "timestamp": _timestamp()}


@router.get("/db", status_code=status.HTTP_200_OK)
def database_health(request: Request) -> JSONResponse:
    """Run SELECT 1 on a pooled connection; 503 when the database is unreachable"""
    engine: Engine = request.app.state.engine

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Database health check failed", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "error",
                "database": {"connected": False, "error": "Database connection failed"},
                "timestamp": _timestamp()
            }
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ok",
            "database": {"connected": True, "pool": _pool_status(engine)},
            "timestamp": _timestamp()
        }
    )
