"""
Attendance Record Model - One start/end entry per user per calendar day
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, UniqueConstraint
from sqlalchemy.sql import func
from atams.db import Base


class AttendanceRecord(Base):
    """Attendance Record model - Table: attendance_records"""
    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint("ar_user_email", "ar_date", name="uq_attendance_records_user_date"),
    )

    ar_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    ar_user_email = Column(String(255), nullable=False, index=True)  # References users(u_email)
    ar_date = Column(Date, nullable=False, index=True)  # Local calendar date
    ar_start_at = Column(DateTime, nullable=True)  # Local wall-clock
    ar_end_at = Column(DateTime, nullable=True)  # Local wall-clock
    ar_comment = Column(Text, nullable=False, default="")
    ar_created_at = Column(DateTime, server_default=func.now(), nullable=False)
    ar_updated_at = Column(DateTime, onupdate=func.now(), nullable=True)
