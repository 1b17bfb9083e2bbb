"""
Attendance Record Repository - Data access layer for daily attendance records
"""
from typing import Optional, List, Dict, Any
from datetime import date, datetime
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from atams.db import BaseRepository
from app.models.attendance_record import AttendanceRecord


class AttendanceRecordRepository(BaseRepository[AttendanceRecord]):
    def __init__(self):
        super().__init__(AttendanceRecord)

    def get_for_day(self, db: Session, email: str, day: date) -> Optional[AttendanceRecord]:
        """Get the record for a user on a specific date using ORM"""
        return db.query(AttendanceRecord).filter(
            AttendanceRecord.ar_user_email == email,
            AttendanceRecord.ar_date == day
        ).first()

    def get_range(self, db: Session, email: str, date_from: date, date_to: date) -> List[AttendanceRecord]:
        """Get a user's records with date_from <= ar_date < date_to, ascending"""
        return db.query(AttendanceRecord).filter(
            AttendanceRecord.ar_user_email == email,
            AttendanceRecord.ar_date >= date_from,
            AttendanceRecord.ar_date < date_to
        ).order_by(AttendanceRecord.ar_date.asc()).all()

    def create_for_day(self, db: Session, data: Dict[str, Any]) -> Optional[AttendanceRecord]:
        """
        Insert a record for (ar_user_email, ar_date).
        Returns None if a record for that key already exists (another request
        created it between our lookup and insert).
        """
        try:
            return self.create(db, data)
        except IntegrityError:
            db.rollback()
            return None

    def mark_started(self, db: Session, record_id: int, started_at: datetime) -> bool:
        """
        Set ar_start_at only if it is still unset.
        Returns False when another request set it first.
        """
        updated = db.query(AttendanceRecord).filter(
            AttendanceRecord.ar_id == record_id,
            AttendanceRecord.ar_start_at.is_(None)
        ).update({AttendanceRecord.ar_start_at: started_at}, synchronize_session=False)
        db.commit()
        return updated == 1

    def mark_ended(self, db: Session, record_id: int, ended_at: datetime) -> bool:
        """
        Set ar_end_at only if the record is started and not yet ended.
        Returns False when the precondition no longer holds.
        """
        updated = db.query(AttendanceRecord).filter(
            AttendanceRecord.ar_id == record_id,
            AttendanceRecord.ar_start_at.isnot(None),
            AttendanceRecord.ar_end_at.is_(None)
        ).update({AttendanceRecord.ar_end_at: ended_at}, synchronize_session=False)
        db.commit()
        return updated == 1
