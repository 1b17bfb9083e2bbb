"""
Reservation Model - Bookings of the shared resource
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from atams.db import Base


class Reservation(Base):
    """Reservation model - Table: reservations"""
    __tablename__ = "reservations"

    r_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    r_user_email = Column(String(255), nullable=False, index=True)
    r_title = Column(String(255), nullable=False)
    r_start_at = Column(DateTime, nullable=False, index=True)
    r_end_at = Column(DateTime, nullable=False)
    r_created_at = Column(DateTime, server_default=func.now(), nullable=False)
    r_updated_at = Column(DateTime, onupdate=func.now(), nullable=True)
