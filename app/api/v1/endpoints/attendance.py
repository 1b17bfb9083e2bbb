"""
Attendance Endpoints - Daily start/end, corrections and monthly history
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_settings, get_attendance_service, require_auth
from app.core.config import Settings
from app.core.exceptions import ValidationException
from app.services import AttendanceService
from app.schemas import AttendanceRecord, AttendanceUpdateRequest, CurrentUser, DataResponse
from atams.encryption import encrypt_response_data

router = APIRouter(dependencies=[Depends(require_auth)])


def _parse_int(value: str, name: str) -> int:
    try:
        return int((value or "").strip())
    except ValueError:
        raise ValidationException(f"Invalid {name}")


@router.get(
    "",
    status_code=status.HTTP_200_OK
)
def get_today(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    attendance_service: AttendanceService = Depends(get_attendance_service),
    settings: Settings = Depends(get_settings)
):
    """
    Get today's attendance record

    **Authentication:**
    - Requires a valid session token

    **Response:**
    - The record, or null when nothing was recorded today
    """
    record = attendance_service.get_today(db, current_user.email)

    response = DataResponse(
        success=True,
        message="Attendance record retrieved successfully" if record else "No attendance record today",
        data=record
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/monthly",
    status_code=status.HTTP_200_OK
)
def get_monthly(
    month: str = Query("", description="Month number (1-12)"),
    year: str = Query("", description="Four-digit year"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    attendance_service: AttendanceService = Depends(get_attendance_service),
    settings: Settings = Depends(get_settings)
):
    """
    Get all attendance records of a month

    **Query Parameters:**
    - month: 1-12
    - year: e.g. 2024

    **Response:**
    - Records in ascending date order, possibly empty

    **Errors:**
    - 400: Month or year missing, not a number, or out of range
    """
    records = attendance_service.get_monthly(
        db,
        current_user.email,
        _parse_int(month, "month"),
        _parse_int(year, "year")
    )

    response = DataResponse(
        success=True,
        message=f"Retrieved {len(records)} attendance records",
        data=records
    )

    return encrypt_response_data(response, settings)


@router.post(
    "/start",
    response_model=DataResponse[AttendanceRecord],
    status_code=status.HTTP_200_OK
)
def start_attendance(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    attendance_service: AttendanceService = Depends(get_attendance_service)
):
    """
    Record today's start time

    **Errors:**
    - 400: Start time already recorded
    """
    record = attendance_service.start(db, current_user.email)

    return DataResponse(
        success=True,
        message="Start time recorded",
        data=record
    )


@router.post(
    "/end",
    response_model=DataResponse[AttendanceRecord],
    status_code=status.HTTP_200_OK
)
def end_attendance(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    attendance_service: AttendanceService = Depends(get_attendance_service)
):
    """
    Record today's end time

    **Errors:**
    - 404: No record today
    - 400: Start time not recorded yet, or end time already recorded
    """
    record = attendance_service.end(db, current_user.email)

    return DataResponse(
        success=True,
        message="End time recorded",
        data=record
    )


@router.post(
    "/update",
    response_model=DataResponse[AttendanceRecord],
    status_code=status.HTTP_200_OK
)
def update_attendance(
    request: AttendanceUpdateRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    attendance_service: AttendanceService = Depends(get_attendance_service)
):
    """
    Correct the record of any date, creating it if needed

    **Request Body:**
    - date: YYYY-MM-DD (required)
    - startTime / endTime: HH:MM, empty leaves the stored value unchanged
    - comment: replaces the stored comment

    **Errors:**
    - 400: Unparseable date or time
    """
    record = attendance_service.update(
        db,
        current_user.email,
        request.date,
        start_time=request.start_time,
        end_time=request.end_time,
        comment=request.comment
    )

    return DataResponse(
        success=True,
        message="Attendance record updated",
        data=record
    )
