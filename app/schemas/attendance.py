"""
Attendance Schemas for daily records
"""
from typing import Optional
from datetime import datetime, date
from pydantic import BaseModel, ConfigDict, Field


class AttendanceRecordBase(BaseModel):
    ar_user_email: str
    ar_date: date
    ar_start_at: Optional[datetime] = None
    ar_end_at: Optional[datetime] = None
    ar_comment: str = ""


class AttendanceRecordInDB(AttendanceRecordBase):
    model_config = ConfigDict(from_attributes=True)

    ar_id: int
    ar_created_at: Optional[datetime] = None
    ar_updated_at: Optional[datetime] = None


class AttendanceRecord(AttendanceRecordInDB):
    pass


# Request schemas for API endpoints
class AttendanceUpdateRequest(BaseModel):
    """
    Request schema for manual correction

    date is YYYY-MM-DD; startTime/endTime are HH:MM, empty or omitted means
    leave unchanged. comment always replaces the stored comment.
    """
    model_config = ConfigDict(populate_by_name=True)

    date: str = ""
    start_time: Optional[str] = Field(None, alias="startTime")
    end_time: Optional[str] = Field(None, alias="endTime")
    comment: Optional[str] = ""
