"""Week window calculations for the bookable Monday-Saturday weeks."""
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from dateutil import tz

from app.config import settings
from app.exceptions import InvalidDayIndexError
from app.models.task import FAKE_DAY_VALUE


# Bookable week days, Monday first
DAY_NAMES: Tuple[str, ...] = (
    "Lunedì",
    "Martedì",
    "Mercoledì",
    "Giovedì",
    "Venerdì",
    "Sabato",
)

SATURDAY = len(DAY_NAMES) - 1


class DayRange:
    """Re-iterable run of consecutive dates."""

    def __init__(self, start: date, count: int):
        self.start = start
        self.count = max(count, 0)

    def __iter__(self) -> Iterator[date]:
        for offset in range(self.count):
            yield self.start + timedelta(days=offset)

    def __len__(self) -> int:
        return self.count

    def __repr__(self) -> str:
        return f"<DayRange(start={self.start}, count={self.count})>"


class WeekService:
    """
    Service mapping the wall clock and week/day selectors to calendar dates.

    Every computation is relative to the Monday of the week containing the
    current date, so injecting a fixed clock makes it deterministic.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        timezone: Optional[str] = None
    ):
        """
        Initialize week service.

        Args:
            clock: Callable returning the current datetime, defaults to wall clock
            timezone: IANA timezone name, defaults to ``settings.timezone``
        """
        self.timezone = tz.gettz(timezone or settings.timezone)
        self.clock = clock or (lambda: datetime.now(self.timezone))

    def now(self) -> datetime:
        """Current datetime in the configured civil timezone."""
        now = self.clock()
        if now.tzinfo is None:
            return now
        return now.astimezone(self.timezone)

    def current_date(self) -> date:
        """
        Get the current bookable date.

        Sunday is never bookable, so on Sundays the following Monday is
        returned instead.
        """
        today = self.now().date()
        if today.weekday() == 6:
            return today + timedelta(days=1)
        return today

    @staticmethod
    def monday_of(day: date) -> date:
        """Floor a date to the Monday of its week."""
        return day - timedelta(days=day.weekday())

    @staticmethod
    def next_week(day: date) -> date:
        """Same weekday one week later."""
        return day + timedelta(days=7)

    @staticmethod
    def days_until_saturday(day: date) -> DayRange:
        """Every date from ``day`` through Saturday of the same week."""
        return DayRange(day, len(DAY_NAMES) - day.weekday())

    @classmethod
    def week_bounds(cls, day: date) -> Tuple[date, date]:
        """Monday and Saturday of the week containing ``day``."""
        monday = cls.monday_of(day)
        return monday, monday + timedelta(days=SATURDAY)

    @classmethod
    def format_week_bounds(cls, day: date) -> str:
        monday, saturday = cls.week_bounds(day)
        return f"{cls.format_date(monday)} - {cls.format_date(saturday)}"

    @staticmethod
    def format_date(day: date) -> str:
        return day.strftime("%d/%m/%Y")

    @staticmethod
    def day_name(day: date) -> str:
        """Italian weekday name; Sunday is reported as Monday."""
        weekday = day.weekday()
        return DAY_NAMES[weekday] if weekday <= SATURDAY else DAY_NAMES[0]

    def week_monday(self, is_current_week: bool) -> date:
        """Monday of the current or of the next week window."""
        monday = self.monday_of(self.current_date())
        return monday if is_current_week else self.next_week(monday)

    def resolve_day(self, is_current_week: bool, day_index: int) -> date:
        """
        Resolve a week selector and a day index into a calendar date.

        Args:
            is_current_week: True for the current week, False for the next one
            day_index: Day within the week, 0=Monday .. 5=Saturday

        Returns:
            The selected date

        Raises:
            InvalidDayIndexError: If the index is the sentinel or out of range
        """
        if day_index == FAKE_DAY_VALUE or not 0 <= day_index <= SATURDAY:
            raise InvalidDayIndexError(day_index)
        return self.week_monday(is_current_week) + timedelta(days=day_index)

    def selectable_days(self, is_current_week: bool) -> List[Dict[str, object]]:
        """
        Days offered by the booking form for a week window.

        The current week starts from today; the next week is complete.
        """
        if is_current_week:
            first = self.current_date()
        else:
            first = self.week_monday(False)
        return [
            {
                "day_index": day.weekday(),
                "day": self.day_name(day),
                "date": self.format_date(day),
                "iso_date": day.isoformat(),
            }
            for day in self.days_until_saturday(first)
        ]

    def week_info(self, is_current_week: bool) -> Dict[str, object]:
        """Bounds and selectable days of a week window."""
        monday = self.week_monday(is_current_week)
        return {
            "is_current_week": is_current_week,
            "bounds": self.format_week_bounds(monday),
            "days": self.selectable_days(is_current_week),
        }
