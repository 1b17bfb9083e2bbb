"""
Reservation Service - Shared resource bookings

Every authenticated user sees all reservations; only the owner may change
or cancel one.
"""
from typing import List, Optional
from datetime import datetime
from sqlalchemy.orm import Session

from app.repositories.reservation_repository import ReservationRepository
from app.models.reservation import Reservation as ReservationModel
from app.schemas.reservation import Reservation, ReservationCreate, ReservationUpdate
from app.core.exceptions import ValidationException
from atams.exceptions import NotFoundException, ForbiddenException
from atams.logging import get_logger

logger = get_logger(__name__)


class ReservationService:
    def __init__(self) -> None:
        self.repo = ReservationRepository()

    @staticmethod
    def _validated_fields(payload: ReservationCreate) -> dict:
        title = payload.r_title.strip()
        if not title:
            raise ValidationException("Reservation title is required")
        if payload.r_end_at <= payload.r_start_at:
            raise ValidationException("Reservation must end after it starts")
        return {
            "r_title": title,
            "r_start_at": payload.r_start_at,
            "r_end_at": payload.r_end_at
        }

    def _get_owned(self, db: Session, email: str, reservation_id: int) -> ReservationModel:
        reservation = self.repo.get(db, reservation_id)
        if not reservation:
            raise NotFoundException("Reservation not found")
        if reservation.r_user_email != email:
            raise ForbiddenException("You can only modify your own reservations")
        return reservation

    def list_reservations(
        self,
        db: Session,
        window_start: Optional[datetime] = None,
        window_end: Optional[datetime] = None
    ) -> List[Reservation]:
        if window_start and window_end and window_end <= window_start:
            raise ValidationException("date_to must be after date_from")
        reservations = self.repo.get_in_window(db, window_start, window_end)
        return [Reservation.model_validate(r) for r in reservations]

    def create_reservation(self, db: Session, email: str, payload: ReservationCreate) -> Reservation:
        data = self._validated_fields(payload)
        reservation = self.repo.create(db, {"r_user_email": email, **data})
        logger.info("Reservation created", extra={'extra_data': {'email': email, 'reservation_id': reservation.r_id}})
        return Reservation.model_validate(reservation)

    def update_reservation(
        self,
        db: Session,
        email: str,
        reservation_id: int,
        payload: ReservationUpdate
    ) -> Reservation:
        reservation = self._get_owned(db, email, reservation_id)
        reservation = self.repo.update(db, reservation, self._validated_fields(payload))
        return Reservation.model_validate(reservation)

    def delete_reservation(self, db: Session, email: str, reservation_id: int) -> None:
        reservation = self._get_owned(db, email, reservation_id)
        self.repo.delete(db, reservation.r_id)
        logger.info("Reservation cancelled", extra={'extra_data': {'email': email, 'reservation_id': reservation_id}})
