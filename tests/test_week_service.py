"""Unit tests for the week window calculations."""
import pytest
from datetime import date, datetime
from dateutil import tz

from app.exceptions import InvalidDayIndexError
from app.models.task import FAKE_DAY_VALUE
from app.services.week_service import WeekService
from tests.conftest import fixed_clock


class TestCurrentDate:
    """Test cases for current_date."""

    def test_weekday_is_returned_as_is(self):
        service = WeekService(clock=fixed_clock(2024, 1, 3))
        assert service.current_date() == date(2024, 1, 3)

    def test_saturday_is_bookable(self):
        service = WeekService(clock=fixed_clock(2024, 1, 6))
        assert service.current_date() == date(2024, 1, 6)

    def test_sunday_rolls_forward_to_monday(self):
        service = WeekService(clock=fixed_clock(2024, 1, 7))
        assert service.current_date() == date(2024, 1, 8)

    def test_clock_is_read_in_civil_timezone(self):
        """Sunday 23:30 UTC is already Monday in Rome."""
        service = WeekService(
            clock=lambda: datetime(2024, 1, 7, 23, 30, tzinfo=tz.UTC),
            timezone="Europe/Rome"
        )
        assert service.current_date() == date(2024, 1, 8)

    def test_default_clock_returns_bookable_day(self):
        assert WeekService().current_date().weekday() < 6


class TestWeekArithmetic:
    """Test cases for Monday, next week and week bounds."""

    def test_monday_of(self):
        assert WeekService.monday_of(date(2024, 1, 3)) == date(2024, 1, 1)
        assert WeekService.monday_of(date(2024, 1, 1)) == date(2024, 1, 1)
        assert WeekService.monday_of(date(2024, 1, 6)) == date(2024, 1, 1)

    def test_monday_of_crosses_month(self):
        assert WeekService.monday_of(date(2024, 3, 2)) == date(2024, 2, 26)

    def test_next_week(self):
        assert WeekService.next_week(date(2024, 12, 30)) == date(2025, 1, 6)

    def test_week_bounds(self):
        assert WeekService.week_bounds(date(2024, 1, 4)) == (date(2024, 1, 1), date(2024, 1, 6))

    def test_format_week_bounds(self):
        assert WeekService.format_week_bounds(date(2024, 1, 4)) == "01/01/2024 - 06/01/2024"

    def test_day_name(self):
        assert WeekService.day_name(date(2024, 1, 1)) == "Lunedì"
        assert WeekService.day_name(date(2024, 1, 6)) == "Sabato"


class TestDaysUntilSaturday:
    """Test cases for days_until_saturday."""

    def test_from_wednesday(self):
        days = WeekService.days_until_saturday(date(2024, 1, 3))
        assert len(days) == 4
        assert list(days) == [
            date(2024, 1, 3), date(2024, 1, 4), date(2024, 1, 5), date(2024, 1, 6)
        ]

    def test_from_monday(self):
        assert len(list(WeekService.days_until_saturday(date(2024, 1, 1)))) == 6

    def test_from_saturday(self):
        assert list(WeekService.days_until_saturday(date(2024, 1, 6))) == [date(2024, 1, 6)]

    def test_is_restartable(self):
        days = WeekService.days_until_saturday(date(2024, 1, 4))
        assert list(days) == list(days)


class TestResolveDay:
    """Test cases for resolve_day."""

    def setup_method(self):
        self.service = WeekService(clock=fixed_clock(2024, 1, 3))

    def test_current_week(self):
        assert self.service.resolve_day(True, 0) == date(2024, 1, 1)
        assert self.service.resolve_day(True, 5) == date(2024, 1, 6)

    def test_next_week(self):
        assert self.service.resolve_day(False, 0) == date(2024, 1, 8)
        assert self.service.resolve_day(False, 3) == date(2024, 1, 11)

    def test_on_sunday_current_week_is_the_coming_one(self):
        service = WeekService(clock=fixed_clock(2024, 1, 7))
        assert service.resolve_day(True, 0) == date(2024, 1, 8)
        assert service.resolve_day(False, 0) == date(2024, 1, 15)

    @pytest.mark.parametrize("day_index", [FAKE_DAY_VALUE, 6, -1, 42])
    def test_invalid_index_raises(self, day_index):
        with pytest.raises(InvalidDayIndexError) as exc_info:
            self.service.resolve_day(True, day_index)
        assert exc_info.value.details["day_index"] == day_index


class TestWeekInfo:
    """Test cases for the form week information."""

    def test_current_week_starts_today(self):
        service = WeekService(clock=fixed_clock(2024, 1, 4))
        info = service.week_info(True)

        assert info["bounds"] == "01/01/2024 - 06/01/2024"
        assert [day["day_index"] for day in info["days"]] == [3, 4, 5]
        assert info["days"][0]["date"] == "04/01/2024"
        assert info["days"][0]["day"] == "Giovedì"

    def test_next_week_is_complete(self):
        service = WeekService(clock=fixed_clock(2024, 1, 4))
        info = service.week_info(False)

        assert info["bounds"] == "08/01/2024 - 13/01/2024"
        assert len(info["days"]) == 6
