"""
Reservation Endpoints - Shared booking calendar
"""
from typing import Optional
from datetime import datetime, time, timedelta
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_settings, get_reservation_service, require_auth
from app.core.config import Settings
from app.services import ReservationService
from app.services.attendance_service import parse_date
from app.schemas import (
    Reservation,
    ReservationCreate,
    ReservationUpdate,
    CurrentUser,
    DataResponse
)
from atams.encryption import encrypt_response_data

router = APIRouter(dependencies=[Depends(require_auth)])


@router.get(
    "",
    status_code=status.HTTP_200_OK
)
def list_reservations(
    date_from: Optional[str] = Query(None, description="First day (YYYY-MM-DD)"),
    date_to: Optional[str] = Query(None, description="Last day, inclusive (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    reservation_service: ReservationService = Depends(get_reservation_service),
    settings: Settings = Depends(get_settings)
):
    """
    List reservations of all users

    **Query Parameters:**
    - date_from / date_to: only reservations overlapping these days

    **Errors:**
    - 400: Unparseable date, or date_to before date_from
    """
    window_start = datetime.combine(parse_date(date_from), time.min) if date_from else None
    window_end = datetime.combine(parse_date(date_to) + timedelta(days=1), time.min) if date_to else None

    reservations = reservation_service.list_reservations(db, window_start, window_end)

    response = DataResponse(
        success=True,
        message=f"Retrieved {len(reservations)} reservations",
        data=reservations
    )

    return encrypt_response_data(response, settings)


@router.post(
    "",
    response_model=DataResponse[Reservation],
    status_code=status.HTTP_201_CREATED
)
def create_reservation(
    payload: ReservationCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    reservation_service: ReservationService = Depends(get_reservation_service)
):
    """
    Book a time slot

    **Errors:**
    - 400: Blank title, or end not after start
    """
    reservation = reservation_service.create_reservation(db, current_user.email, payload)
    return DataResponse(success=True, message="Reservation created successfully", data=reservation)


@router.put(
    "/{reservation_id}",
    response_model=DataResponse[Reservation],
    status_code=status.HTTP_200_OK
)
def update_reservation(
    reservation_id: int,
    payload: ReservationUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    reservation_service: ReservationService = Depends(get_reservation_service)
):
    reservation = reservation_service.update_reservation(
        db, current_user.email, reservation_id, payload
    )
    return DataResponse(success=True, message="Reservation updated successfully", data=reservation)


@router.delete(
    "/{reservation_id}",
    response_model=DataResponse[None],
    status_code=status.HTTP_200_OK
)
def delete_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    reservation_service: ReservationService = Depends(get_reservation_service)
):
    """Cancel a reservation owned by the caller"""
    reservation_service.delete_reservation(db, current_user.email, reservation_id)
    return DataResponse(success=True, message="Reservation cancelled successfully")
