"""Task catalog and hour table for bookable shifts.

Tasks are defined in code only. Two catalogs exist: free tasks whose hours are
chosen by the volunteer from ``HOURS``, and fixed tasks which carry their own
hour range.
"""
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from app.config import settings


# Selectable hours, one-hour granularity
HOURS: Tuple[str, ...] = (
    "08:00", "09:00", "10:00", "11:00", "12:00", "13:00",
    "14:00", "15:00", "16:00", "17:00", "18:00",
)

# Reserved form values meaning "nothing selected"
FAKE_DAY_VALUE = 10
FAKE_TASK_VALUE = 100

# Task slots a single day of the booking form can carry
MAX_SLOTS = 10


@dataclass(frozen=True)
class Task:
    """A bookable task."""

    key: int
    name: str
    entrance_hour: Optional[str] = None
    exit_hour: Optional[str] = None

    @property
    def has_fixed_hours(self) -> bool:
        return self.entrance_hour is not None and self.exit_hour is not None

    @property
    def hours(self) -> Optional[str]:
        """Hour range as displayed to volunteers, e.g. ``08:00 - 12:00``."""
        if not self.has_fixed_hours:
            return None
        return f"{self.entrance_hour} - {self.exit_hour}"

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "key": self.key,
            "name": self.name,
            "hours": self.hours,
        }


VARIABLE_TASKS: Tuple[Task, ...] = (
    Task(0, "Cucina"),
    Task(1, "Sala"),
    Task(2, "Camere"),
    Task(3, "Giardino"),
)

FIXED_TASKS: Tuple[Task, ...] = (
    Task(0, "Aiuto Cucina", "08:00", "12:00"),
    Task(1, "Servizio Sala", "12:00", "15:00"),
    Task(2, "Riordino Camere", "09:00", "12:00"),
    Task(3, "Cura Giardino", "15:00", "18:00"),
    Task(4, "Accoglienza", "08:00", "18:00"),
)


class TaskCatalog:
    """Lookup over one of the task tables."""

    def __init__(self, tasks: Sequence[Task], fixed_hours: bool):
        self.fixed_hours = fixed_hours
        self._tasks = {task.key: task for task in tasks}

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, key: object) -> bool:
        return key in self._tasks

    def get(self, key: int) -> Optional[Task]:
        return self._tasks.get(key)

    def name(self, key: int) -> str:
        task = self._tasks.get(key)
        return task.name if task else str(key)


def get_task_catalog(fixed_hours: Optional[bool] = None) -> TaskCatalog:
    """
    Return the task catalog for the configured task mode.

    Args:
        fixed_hours: Override for ``settings.task_mode``

    Returns:
        TaskCatalog instance
    """
    if fixed_hours is None:
        fixed_hours = settings.fixed_tasks
    if fixed_hours:
        return TaskCatalog(FIXED_TASKS, fixed_hours=True)
    return TaskCatalog(VARIABLE_TASKS, fixed_hours=False)


def entrance_hour_choices() -> List[Dict[str, object]]:
    """Entrance hours offered by the form (every hour but the last)."""
    return [{"value": index, "show": HOURS[index]} for index in range(len(HOURS) - 1)]


def exit_hour_choices() -> List[Dict[str, object]]:
    """Exit hours offered by the form (every hour but the first)."""
    return [{"value": index, "show": HOURS[index]} for index in range(1, len(HOURS))]


def hour_intervals() -> List[Tuple[str, str]]:
    """Every consecutive one-hour interval of the hour table."""
    return list(zip(HOURS, HOURS[1:]))
