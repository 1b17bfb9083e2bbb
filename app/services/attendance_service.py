"""
Attendance Service - Daily attendance state machine and monthly queries

Per (user, date) a record moves NoRecord -> Started -> Completed through
start/end. update is the administrative override and may set any field from
any state.
"""
import re
from typing import Callable, List, Optional
from datetime import datetime, date, time
from sqlalchemy.orm import Session

from app.repositories.attendance_record_repository import AttendanceRecordRepository
from app.models.attendance_record import AttendanceRecord as AttendanceRecordModel
from app.schemas.attendance import AttendanceRecord
from app.core.exceptions import (
    ValidationException,
    AlreadyStartedException,
    AlreadyEndedException,
    NotStartedException
)
from atams.exceptions import NotFoundException, InternalServerException
from atams.logging import get_logger

logger = get_logger(__name__)

MIN_YEAR = 1
MAX_YEAR = 9998  # first-of-next-month must still be a valid date

DATE_FORMAT = "%Y-%m-%d"
CLOCK_FORMAT = "%H:%M"

# strptime alone accepts unpadded fields such as "9:5"
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
CLOCK_PATTERN = re.compile(r"^\d{2}:\d{2}$")


def parse_date(value: str) -> date:
    value = (value or "").strip()
    message = "Invalid date format. Use YYYY-MM-DD"
    if not DATE_PATTERN.match(value):
        raise ValidationException(message)
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise ValidationException(message)


def parse_clock(value: Optional[str], field: str) -> Optional[time]:
    """HH:MM (24h) to time; empty or None means not supplied"""
    if value is None or not value.strip():
        return None
    value = value.strip()
    message = f"Invalid {field} format. Use HH:MM"
    if not CLOCK_PATTERN.match(value):
        raise ValidationException(message)
    try:
        return datetime.strptime(value, CLOCK_FORMAT).time()
    except ValueError:
        raise ValidationException(message)


def month_bounds(month: int, year: int) -> tuple:
    """[first day of month, first day of next month)"""
    if not 1 <= month <= 12:
        raise ValidationException("Invalid month")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationException("Invalid year")

    first = date(year, month, 1)
    if month == 12:
        return first, date(year + 1, 1, 1)
    return first, date(year, month + 1, 1)


class AttendanceService:
    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.repo = AttendanceRecordRepository()
        self.clock = clock or datetime.now

    def _now(self) -> datetime:
        # Local wall-clock, second precision
        return self.clock().replace(microsecond=0)

    def get_today(self, db: Session, email: str) -> Optional[AttendanceRecord]:
        """Get today's record; None is a normal result, not an error"""
        record = self.repo.get_for_day(db, email, self._now().date())
        if not record:
            return None
        return AttendanceRecord.model_validate(record)

    def get_monthly(self, db: Session, email: str, month: int, year: int) -> List[AttendanceRecord]:
        """
        Get all records of a month in ascending date order

        Raises:
            ValidationException: month not in 1..12 or year out of range
        """
        date_from, date_to = month_bounds(month, year)
        records = self.repo.get_range(db, email, date_from, date_to)
        return [AttendanceRecord.model_validate(r) for r in records]

    def start(self, db: Session, email: str) -> AttendanceRecord:
        """
        Record today's start time

        Raises:
            AlreadyStartedException: Start already recorded today, including
                when a concurrent request created the record first
        """
        now = self._now()
        today = now.date()
        record = self.repo.get_for_day(db, email, today)

        if record is None:
            created = self.repo.create_for_day(db, {
                "ar_user_email": email,
                "ar_date": today,
                "ar_start_at": now,
                "ar_comment": ""
            })
            if created is None:
                logger.info(
                    "Concurrent start resolved to existing record",
                    extra={'extra_data': {'email': email, 'date': today.isoformat()}}
                )
                raise AlreadyStartedException()

            logger.info("Attendance started", extra={'extra_data': {'email': email, 'date': today.isoformat()}})
            return AttendanceRecord.model_validate(created)

        if record.ar_start_at is not None:
            raise AlreadyStartedException()

        # Record exists from a correction without a start time
        if not self.repo.mark_started(db, record.ar_id, now):
            raise AlreadyStartedException()

        db.refresh(record)
        logger.info("Attendance started", extra={'extra_data': {'email': email, 'date': today.isoformat()}})
        return AttendanceRecord.model_validate(record)

    def end(self, db: Session, email: str) -> AttendanceRecord:
        """
        Record today's end time

        Raises:
            NotFoundException: No record today
            NotStartedException: Start time not recorded yet
            AlreadyEndedException: End time already recorded
        """
        now = self._now()
        today = now.date()
        record = self.repo.get_for_day(db, email, today)

        if record is None:
            raise NotFoundException("Attendance record not found")
        self._check_can_end(record)

        if not self.repo.mark_ended(db, record.ar_id, now):
            # Another request changed the record between read and write
            db.refresh(record)
            self._check_can_end(record)
            raise InternalServerException("Unable to update attendance record")

        db.refresh(record)
        logger.info("Attendance ended", extra={'extra_data': {'email': email, 'date': today.isoformat()}})
        return AttendanceRecord.model_validate(record)

    @staticmethod
    def _check_can_end(record: AttendanceRecordModel) -> None:
        if record.ar_start_at is None:
            raise NotStartedException()
        if record.ar_end_at is not None:
            raise AlreadyEndedException()

    def update(
        self,
        db: Session,
        email: str,
        record_date: str,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        comment: Optional[str] = ""
    ) -> AttendanceRecord:
        """
        Manually correct (or create) the record of a given date

        Supplied times are combined with the record's date. Empty times leave
        the stored value unchanged; the comment is always replaced. No
        start-before-end or idempotency checks apply here.

        Raises:
            ValidationException: Unparseable date or time
        """
        day = parse_date(record_date)
        start_clock = parse_clock(start_time, "start time")
        end_clock = parse_clock(end_time, "end time")

        update_data = {"ar_comment": comment or ""}
        if start_clock is not None:
            update_data["ar_start_at"] = datetime.combine(day, start_clock)
        if end_clock is not None:
            update_data["ar_end_at"] = datetime.combine(day, end_clock)

        record = self.repo.get_for_day(db, email, day)
        if record is None:
            record = self.repo.create_for_day(db, {
                "ar_user_email": email,
                "ar_date": day,
                **update_data
            })
            if record is not None:
                logger.info(
                    "Attendance record created by correction",
                    extra={'extra_data': {'email': email, 'date': day.isoformat()}}
                )
                return AttendanceRecord.model_validate(record)

            # Created concurrently; apply the correction to that record
            record = self.repo.get_for_day(db, email, day)
            if record is None:
                raise InternalServerException("Unable to update attendance record")

        record = self.repo.update(db, record, update_data)
        logger.info("Attendance record corrected", extra={'extra_data': {'email': email, 'date': day.isoformat()}})
        return AttendanceRecord.model_validate(record)
