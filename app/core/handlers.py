"""
Exception handlers that never expose storage or runtime error detail

Registered after atams.setup_exception_handlers so they replace the atams
handlers for SQLAlchemyError and Exception. AppException, request validation
and IntegrityError keep the atams behaviour.
"""
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from atams.exceptions import setup_exception_handlers
from atams.logging import get_logger

logger = get_logger(__name__)


def _error_context(request: Request, exc: Exception) -> dict:
    return {
        'error_type': type(exc).__name__,
        'path': request.url.path,
        'method': request.method,
        'request_id': getattr(request.state, 'request_id', None),
    }


def _internal_error_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": "Internal server error",
            "details": {}
        }
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Log database errors internally, return a generic 500"""
    logger.error(
        f"Database error: {exc}",
        exc_info=True,
        extra={'extra_data': _error_context(request, exc)}
    )
    return _internal_error_response()


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log unhandled exceptions internally, return a generic 500"""
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra={'extra_data': _error_context(request, exc)}
    )
    return _internal_error_response()


def register_exception_handlers(app: FastAPI) -> None:
    setup_exception_handlers(app)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
