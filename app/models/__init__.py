from .user import User, CredentialState
from .attendance_record import AttendanceRecord
from .task import Task
from .reservation import Reservation

__all__ = [
    "User",
    "CredentialState",
    "AttendanceRecord",
    "Task",
    "Reservation"
]
