"""
Attendance Ledger - Application factory

Run with:
    uvicorn app.main:create_app --factory
"""
from datetime import timedelta
from typing import Optional

from argon2 import PasswordHasher
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from atams.logging import setup_logging_from_settings, get_logger
from atams.middleware import RequestIDMiddleware, create_rate_limit_middleware
from atams.db import Base

from app import models  # noqa: F401  registers tables on Base.metadata
from app.core.config import Settings
from app.core.handlers import register_exception_handlers
from app.db.session import create_engine_from_settings, create_session_factory
from app.api.health import router as health_router
from app.api.v1.api import api_router
from app.services import (
    JwtService,
    CredentialService,
    AttendanceService,
    TaskService,
    ReservationService
)

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and everything it depends on

    Configuration is validated here; an invalid SESSION_SECRET raises before
    any route is served.
    """
    settings = settings or Settings()

    # Setup logging
    setup_logging_from_settings(settings)

    # Database
    engine = create_engine_from_settings(settings)
    session_factory = create_session_factory(engine)
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        description="Authenticated attendance ledger with tasks and reservations",
        swagger_ui_parameters={
            "persistAuthorization": True,
        },
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.jwt_service = JwtService(
        settings.session_secret_bytes,
        algorithm=settings.SESSION_ALGORITHM,
        ttl=timedelta(hours=settings.SESSION_TTL_HOURS)
    )
    app.state.credential_service = CredentialService(
        PasswordHasher(
            time_cost=settings.PASSWORD_HASH_TIME_COST,
            memory_cost=settings.PASSWORD_HASH_MEMORY_COST,
            parallelism=settings.PASSWORD_HASH_PARALLELISM
        )
    )
    app.state.attendance_service = AttendanceService()
    app.state.task_service = TaskService()
    app.state.reservation_service = ReservationService()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.cors_methods_list,
        allow_headers=settings.cors_headers_list,
    )

    # Rate limiting
    if settings.RATE_LIMIT_ENABLED:
        app.add_middleware(create_rate_limit_middleware(settings))

    # Request ID middleware
    app.add_middleware(RequestIDMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    # Include routers
    app.include_router(health_router, prefix="/health", tags=["Health"])
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", tags=["Root"])
    def root():
        """API Root - Basic information"""
        return {"name": settings.APP_NAME, "version": settings.APP_VERSION}

    logger.info(
        "Application created",
        extra={'extra_data': {'version': settings.APP_VERSION, 'api_prefix': settings.API_PREFIX}}
    )
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:create_app", factory=True, host="0.0.0.0", port=8000)
