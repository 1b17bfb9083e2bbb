"""
Reservation Repository - Data access layer for reservations
"""
from typing import List, Optional
from datetime import datetime
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.reservation import Reservation


class ReservationRepository(BaseRepository[Reservation]):
    def __init__(self):
        super().__init__(Reservation)

    def get_in_window(
        self,
        db: Session,
        window_start: Optional[datetime] = None,
        window_end: Optional[datetime] = None
    ) -> List[Reservation]:
        """Get reservations overlapping [window_start, window_end), ordered by start"""
        query = db.query(Reservation)

        if window_start:
            query = query.filter(Reservation.r_end_at > window_start)
        if window_end:
            query = query.filter(Reservation.r_start_at < window_end)

        return query.order_by(Reservation.r_start_at.asc(), Reservation.r_id.asc()).all()
