from .auth import (
    CredentialsRequest,
    RegisterResponse,
    TokenResponse,
    ChangePasswordRequest,
    CurrentUser,
    Identity
)
from .attendance import AttendanceRecord, AttendanceUpdateRequest
from .task import Task, TaskCreate, TaskUpdate
from .reservation import Reservation, ReservationCreate, ReservationUpdate
from atams.schemas import DataResponse

__all__ = [
    # Auth schemas
    "CredentialsRequest",
    "RegisterResponse",
    "TokenResponse",
    "ChangePasswordRequest",
    "CurrentUser",
    "Identity",
    # Attendance schemas
    "AttendanceRecord",
    "AttendanceUpdateRequest",
    # Task schemas
    "Task",
    "TaskCreate",
    "TaskUpdate",
    # Reservation schemas
    "Reservation",
    "ReservationCreate",
    "ReservationUpdate",
    # Common schemas
    "DataResponse"
]
