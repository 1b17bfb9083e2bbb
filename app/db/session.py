"""
Database Session Management

The engine and session factory are built once per application by create_app
and kept on app.state; nothing here is a module-level global.
"""
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker, Session
from atams.db.session import normalize_database_url

from app.core.config import Settings


def create_engine_from_settings(settings: Settings) -> Engine:
    """
    Create SQLAlchemy engine with the configured connection pool

    SQLite (used by the test suite and local development) does not take pool
    sizing arguments and must allow use from the threadpool.
    """
    db_url = normalize_database_url(settings.DATABASE_URL)

    if settings.is_sqlite:
        return create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            echo=settings.DEBUG,
        )

    return create_engine(
        db_url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_pre_ping=settings.DB_POOL_PRE_PING,
        echo=settings.DEBUG,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency

    Usage:
        @router.get("/")
        def endpoint(db: Session = Depends(get_db)):
            # Use db here
            pass
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
