"""Database models package."""
from app.models.volunteer import Volunteer
from app.models.shift import Shift, ShiftSlot
from app.models.task import (
    Task,
    TaskCatalog,
    HOURS,
    FAKE_DAY_VALUE,
    FAKE_TASK_VALUE,
    get_task_catalog,
)

__all__ = [
    "Volunteer",
    "Shift",
    "ShiftSlot",
    "Task",
    "TaskCatalog",
    "HOURS",
    "FAKE_DAY_VALUE",
    "FAKE_TASK_VALUE",
    "get_task_catalog",
]
