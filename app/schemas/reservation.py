"""
Reservation Schemas
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator


class ReservationBase(BaseModel):
    r_title: str = ""
    r_start_at: datetime
    r_end_at: datetime

    @field_validator("r_start_at", "r_end_at")
    @classmethod
    def to_local_wall_clock(cls, v: datetime) -> datetime:
        """Columns hold naive local time; values with an offset are converted to it"""
        if v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v


class ReservationCreate(ReservationBase):
    pass


class ReservationUpdate(ReservationBase):
    pass


class Reservation(ReservationBase):
    model_config = ConfigDict(from_attributes=True)

    r_id: int
    r_user_email: str
    r_created_at: Optional[datetime] = None
    r_updated_at: Optional[datetime] = None
