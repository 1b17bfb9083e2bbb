"""Daily attendance state machine, corrections and monthly queries"""
from datetime import date, datetime

import pytest

from app.core.exceptions import (
    AlreadyEndedException,
    AlreadyStartedException,
    NotStartedException,
    ValidationException
)
from app.models import AttendanceRecord as AttendanceRecordModel
from app.services.attendance_service import AttendanceService, month_bounds, parse_clock
from atams.exceptions import NotFoundException
from tests.conftest import FakeClock

EMAIL = "ana@example.com"


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 2, 29, 9, 15, 30, 987654))


@pytest.fixture
def service(clock):
    return AttendanceService(clock=clock)


def _records(db, email=EMAIL):
    return db.query(AttendanceRecordModel).filter(AttendanceRecordModel.ar_user_email == email).all()


class TestStart:
    def test_creates_todays_record(self, db, service):
        record = service.start(db, EMAIL)

        assert record.ar_date == date(2024, 2, 29)
        assert record.ar_start_at == datetime(2024, 2, 29, 9, 15, 30)
        assert record.ar_end_at is None
        assert record.ar_comment == ""

    def test_second_start_rejected_and_unchanged(self, db, service, clock):
        first = service.start(db, EMAIL)
        clock.advance(hours=1)

        with pytest.raises(AlreadyStartedException):
            service.start(db, EMAIL)

        assert service.get_today(db, EMAIL).ar_start_at == first.ar_start_at

    def test_fills_start_of_corrected_record(self, db, service):
        service.update(db, EMAIL, "2024-02-29", comment="remote day")

        record = service.start(db, EMAIL)

        assert record.ar_start_at == datetime(2024, 2, 29, 9, 15, 30)
        assert record.ar_comment == "remote day"
        assert len(_records(db)) == 1

    def test_concurrent_starts_create_one_record(self, db, service, monkeypatch):
        # Every caller sees "no record yet", as when all lookups precede the first insert
        monkeypatch.setattr(service.repo, "get_for_day", lambda db, email, day: None)

        outcomes = []
        for _ in range(5):
            try:
                service.start(db, EMAIL)
                outcomes.append("started")
            except AlreadyStartedException:
                outcomes.append("already")

        assert outcomes.count("started") == 1
        assert outcomes.count("already") == 4
        assert len(_records(db)) == 1

    def test_users_are_independent(self, db, service):
        service.start(db, EMAIL)
        service.start(db, "ben@example.com")

        assert len(_records(db)) == 1
        assert len(_records(db, "ben@example.com")) == 1


class TestEnd:
    def test_completes_record(self, db, service, clock):
        service.start(db, EMAIL)
        clock.advance(hours=8, minutes=30)

        record = service.end(db, EMAIL)

        assert record.ar_end_at == datetime(2024, 2, 29, 17, 45, 30)
        assert record.ar_start_at == datetime(2024, 2, 29, 9, 15, 30)

    def test_without_record(self, db, service):
        with pytest.raises(NotFoundException):
            service.end(db, EMAIL)

    def test_before_start(self, db, service):
        service.update(db, EMAIL, "2024-02-29", comment="no start yet")

        with pytest.raises(NotStartedException):
            service.end(db, EMAIL)

    def test_twice(self, db, service, clock):
        service.start(db, EMAIL)
        clock.advance(hours=8)
        first = service.end(db, EMAIL)
        clock.advance(hours=1)

        with pytest.raises(AlreadyEndedException):
            service.end(db, EMAIL)

        assert service.get_today(db, EMAIL).ar_end_at == first.ar_end_at

    def test_previous_day_not_used(self, db, service, clock):
        service.start(db, EMAIL)
        clock.advance(days=1)

        with pytest.raises(NotFoundException):
            service.end(db, EMAIL)


class TestGetToday:
    def test_none_without_record(self, db, service):
        assert service.get_today(db, EMAIL) is None

    def test_after_midnight_is_a_new_day(self, db, service, clock):
        service.start(db, EMAIL)
        clock.advance(days=1)

        assert service.get_today(db, EMAIL) is None


class TestUpdate:
    def test_creates_record_for_any_date(self, db, service):
        record = service.update(db, EMAIL, "2023-12-24", start_time="08:00", end_time="12:30", comment="half day")

        assert record.ar_date == date(2023, 12, 24)
        assert record.ar_start_at == datetime(2023, 12, 24, 8, 0)
        assert record.ar_end_at == datetime(2023, 12, 24, 12, 30)
        assert record.ar_comment == "half day"

    def test_empty_times_leave_values_unchanged(self, db, service):
        service.update(db, EMAIL, "2024-01-10", start_time="09:00", end_time="17:00", comment="first")

        record = service.update(db, EMAIL, "2024-01-10", start_time="", end_time=None, comment="second")

        assert record.ar_start_at == datetime(2024, 1, 10, 9, 0)
        assert record.ar_end_at == datetime(2024, 1, 10, 17, 0)
        assert record.ar_comment == "second"

    def test_comment_always_replaced(self, db, service):
        service.update(db, EMAIL, "2024-01-10", comment="first")

        record = service.update(db, EMAIL, "2024-01-10", start_time="09:00")

        assert record.ar_comment == ""

    def test_end_before_start_is_accepted(self, db, service):
        record = service.update(db, EMAIL, "2024-01-10", start_time="17:00", end_time="09:00")

        assert record.ar_end_at < record.ar_start_at

    def test_overrides_completed_record(self, db, service, clock):
        service.start(db, EMAIL)
        clock.advance(hours=8)
        service.end(db, EMAIL)

        record = service.update(db, EMAIL, "2024-02-29", start_time="08:00")

        assert record.ar_start_at == datetime(2024, 2, 29, 8, 0)
        assert len(_records(db)) == 1

    @pytest.mark.parametrize("value", ["", "29-02-2024", "2024-02-30", "yesterday", "2024-2-5", "24-02-05"])
    def test_invalid_date(self, db, service, value):
        with pytest.raises(ValidationException):
            service.update(db, EMAIL, value, start_time="09:00")

    @pytest.mark.parametrize("value", ["9am", "25:00", "12:60", "12-30", "9:5", "9:05", "09:5", "009:05"])
    def test_invalid_time(self, db, service, value):
        with pytest.raises(ValidationException):
            service.update(db, EMAIL, "2024-01-10", start_time=value)

        assert _records(db) == []


class TestMonthly:
    def test_february_of_leap_year(self, db, service):
        for day in ("2024-01-31", "2024-02-01", "2024-02-29", "2024-03-01", "2024-02-15"):
            service.update(db, EMAIL, day, start_time="09:00")
        service.update(db, "ben@example.com", "2024-02-10", start_time="09:00")

        records = service.get_monthly(db, EMAIL, 2, 2024)

        assert [r.ar_date for r in records] == [date(2024, 2, 1), date(2024, 2, 15), date(2024, 2, 29)]

    def test_december_rolls_into_next_year(self, db, service):
        service.update(db, EMAIL, "2023-12-31", start_time="09:00")
        service.update(db, EMAIL, "2024-01-01", start_time="09:00")

        records = service.get_monthly(db, EMAIL, 12, 2023)

        assert [r.ar_date for r in records] == [date(2023, 12, 31)]

    def test_empty_month(self, db, service):
        assert service.get_monthly(db, EMAIL, 7, 2024) == []

    @pytest.mark.parametrize("month,year", [(0, 2024), (13, 2024), (1, 0), (1, 10000), (12, 9999)])
    def test_out_of_range(self, db, service, month, year):
        with pytest.raises(ValidationException):
            service.get_monthly(db, EMAIL, month, year)


def test_month_bounds():
    assert month_bounds(2, 2023) == (date(2023, 2, 1), date(2023, 3, 1))
    assert month_bounds(12, 9998) == (date(9998, 12, 1), date(9999, 1, 1))


def test_parse_clock_blank_means_unset():
    assert parse_clock(None, "start time") is None
    assert parse_clock("  ", "start time") is None


class TestLostRaces:
    def test_start_loses_to_concurrent_start_on_corrected_record(self, db, service, monkeypatch):
        service.update(db, EMAIL, "2024-02-29", comment="remote day")
        mark_started = service.repo.mark_started
        winner_start = datetime(2024, 2, 29, 9, 0, 0)

        def started_by_other_request(db, record_id, started_at):
            mark_started(db, record_id, winner_start)
            return mark_started(db, record_id, started_at)

        monkeypatch.setattr(service.repo, "mark_started", started_by_other_request)

        with pytest.raises(AlreadyStartedException):
            service.start(db, EMAIL)

        assert service.get_today(db, EMAIL).ar_start_at == winner_start

    def test_end_loses_to_concurrent_end(self, db, service, clock, monkeypatch):
        service.start(db, EMAIL)
        clock.advance(hours=8)
        mark_ended = service.repo.mark_ended
        winner_end = datetime(2024, 2, 29, 17, 0, 0)

        def ended_by_other_request(db, record_id, ended_at):
            mark_ended(db, record_id, winner_end)
            return mark_ended(db, record_id, ended_at)

        monkeypatch.setattr(service.repo, "mark_ended", ended_by_other_request)

        with pytest.raises(AlreadyEndedException):
            service.end(db, EMAIL)

        assert service.get_today(db, EMAIL).ar_end_at == winner_end

    def test_update_applies_to_concurrently_created_record(self, db, service, monkeypatch):
        winner = service.start(db, EMAIL)
        get_for_day = service.repo.get_for_day
        lookups = []

        def stale_first_lookup(db, email, day):
            # The first lookup predates the concurrent insert
            lookups.append(day)
            if len(lookups) == 1:
                return None
            return get_for_day(db, email, day)

        monkeypatch.setattr(service.repo, "get_for_day", stale_first_lookup)

        record = service.update(db, EMAIL, "2024-02-29", end_time="18:00", comment="corrected")

        assert record.ar_id == winner.ar_id
        assert record.ar_start_at == winner.ar_start_at
        assert record.ar_end_at == datetime(2024, 2, 29, 18, 0)
        assert record.ar_comment == "corrected"
        assert len(lookups) == 2
        assert len(_records(db)) == 1
