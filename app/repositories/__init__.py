from .user_repository import UserRepository
from .attendance_record_repository import AttendanceRecordRepository
from .task_repository import TaskRepository
from .reservation_repository import ReservationRepository

__all__ = [
    "UserRepository",
    "AttendanceRecordRepository",
    "TaskRepository",
    "ReservationRepository"
]
