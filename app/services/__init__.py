"""Business logic services package."""
from app.services.auth_service import AuthService
from app.services.volunteer_service import VolunteerService
from app.services.week_service import WeekService
from app.services.shift_builder import ShiftSetBuilder
from app.services.shift_service import ShiftService
from app.services.notification_service import ChangeNotifier, notifier

__all__ = [
    "AuthService",
    "VolunteerService",
    "WeekService",
    "ShiftSetBuilder",
    "ShiftService",
    "ChangeNotifier",
    "notifier"
]
