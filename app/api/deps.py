"""
API Dependencies
Provides service lookup and the authentication gate

Services are built once by create_app and stored on app.state; endpoints
receive them through these dependencies.
"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import Settings
from app.core.exceptions import InvalidTokenException
from app.db.session import get_db
from app.schemas.auth import CurrentUser
from app.services import (
    JwtService,
    CredentialService,
    AttendanceService,
    TaskService,
    ReservationService
)
from atams.exceptions import UnauthorizedException
from atams.logging import get_logger

logger = get_logger(__name__)

# Bearer token security, a missing header is handled by require_auth
security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_jwt_service(request: Request) -> JwtService:
    return request.app.state.jwt_service


def get_credential_service(request: Request) -> CredentialService:
    return request.app.state.credential_service


def get_attendance_service(request: Request) -> AttendanceService:
    return request.app.state.attendance_service


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def get_reservation_service(request: Request) -> ReservationService:
    return request.app.state.reservation_service


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    jwt_service: JwtService = Depends(get_jwt_service)
) -> Optional[CurrentUser]:
    """
    Resolve the caller's identity from the Authorization: Bearer header

    Returns:
        CurrentUser, or None if the token is absent or rejected
    """
    if not credentials or not credentials.credentials:
        return None

    try:
        email = jwt_service.verify(credentials.credentials)
    except InvalidTokenException as e:
        logger.info(f"Session token rejected: {e.message}")
        return None

    return CurrentUser(email=email)


def require_auth(
    request: Request,
    current_user: Optional[CurrentUser] = Depends(get_current_user)
) -> CurrentUser:
    """
    Require authenticated user and bind it to the request state

    Raises:
        UnauthorizedException 401 if user not authenticated
    """
    if not current_user:
        raise UnauthorizedException("Not authenticated")

    request.state.current_user = current_user
    return current_user


__all__ = [
    "get_db",
    "get_settings",
    "get_jwt_service",
    "get_credential_service",
    "get_attendance_service",
    "get_task_service",
    "get_reservation_service",
    "get_current_user",
    "require_auth",
]
