from .jwt_service import JwtService
from .credential_service import CredentialService
from .attendance_service import AttendanceService
from .task_service import TaskService
from .reservation_service import ReservationService

__all__ = [
    "JwtService",
    "CredentialService",
    "AttendanceService",
    "TaskService",
    "ReservationService"
]
