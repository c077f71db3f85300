"""Conversion of booking form selections into new shift records.

A submission goes through ``RECEIVED -> VALIDATED -> DIFFED -> READY`` or
stops at ``REJECTED`` when an hour range is invalid. Nothing is partially
applied: a rejected submission yields no shifts at all.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple
import enum
import logging

from app.exceptions import (
    EntranceAfterExitError,
    EqualHoursError,
    HourRangeError,
    InvalidDayIndexError,
)
from app.models.shift import ShiftSlot
from app.models.task import FAKE_DAY_VALUE, FAKE_TASK_VALUE, HOURS, TaskCatalog, get_task_catalog
from app.services.week_service import WeekService


logger = logging.getLogger(__name__)


# (is_current_week, day_index)
DayKey = Tuple[bool, int]


class SubmissionState(str, enum.Enum):
    """Processing state of a booking submission."""
    RECEIVED = "received"
    VALIDATED = "validated"
    DIFFED = "diffed"
    READY = "ready"
    REJECTED = "rejected"


# Allowed moves; READY and REJECTED are terminal
TRANSITIONS = {
    SubmissionState.RECEIVED: {SubmissionState.VALIDATED, SubmissionState.REJECTED},
    SubmissionState.VALIDATED: {SubmissionState.DIFFED},
    SubmissionState.DIFFED: {SubmissionState.READY},
    SubmissionState.READY: set(),
    SubmissionState.REJECTED: set(),
}


@dataclass
class DaySelection:
    """Task slots chosen for one day; hours are indices into ``HOURS``."""

    tasks: List[int] = field(default_factory=list)
    entrance_hours: List[Optional[int]] = field(default_factory=list)
    exit_hours: List[Optional[int]] = field(default_factory=list)

    def slots(self) -> Iterator[Tuple[int, int, Optional[int], Optional[int]]]:
        """Yield ``(slot_index, task, entrance, exit)`` for every real task slot."""
        for index, task in enumerate(self.tasks):
            if task == FAKE_TASK_VALUE:
                continue
            entrance = self.entrance_hours[index] if index < len(self.entrance_hours) else None
            exit_ = self.exit_hours[index] if index < len(self.exit_hours) else None
            yield index, task, entrance, exit_


@dataclass
class WeekSelection:
    """Selected days of one week window, keyed by day index."""

    days: Dict[int, DaySelection] = field(default_factory=dict)

    def selected_days(self) -> List[int]:
        """Selected real day indices in ascending order."""
        return sorted(day for day in self.days if day != FAKE_DAY_VALUE)


@dataclass
class ShiftSubmission:
    """A volunteer's booking form for the current and the next week."""

    card_id: int
    current: WeekSelection = field(default_factory=WeekSelection)
    next: WeekSelection = field(default_factory=WeekSelection)

    def weeks(self) -> Iterator[Tuple[bool, WeekSelection]]:
        yield True, self.current
        yield False, self.next


@dataclass
class SubmissionOutcome:
    """
    Processing record of a submission.

    ``history`` lists every state the submission went through, starting at
    ``RECEIVED``; ``state`` is the last one.
    """

    state: SubmissionState = SubmissionState.RECEIVED
    shifts: Set[ShiftSlot] = field(default_factory=set)
    error: Optional[HourRangeError] = None
    history: List[SubmissionState] = field(default_factory=lambda: [SubmissionState.RECEIVED])

    def advance(self, state: SubmissionState) -> None:
        """
        Move to the next state.

        Raises:
            ValueError: If the transition is not allowed
        """
        if state not in TRANSITIONS[self.state]:
            raise ValueError(f"Invalid submission transition: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)


def split_hour_range(
    entrance_index: int,
    exit_index: int,
    hours: Sequence[str] = HOURS
) -> List[Tuple[str, str]]:
    """
    Split an hour range into consecutive one-hour intervals.

    Args:
        entrance_index: Index of the entrance hour in ``hours``
        exit_index: Index of the exit hour in ``hours``
        hours: Hour labels table

    Returns:
        ``exit_index - entrance_index`` pairs of hour labels, empty when the
        range is empty or reversed
    """
    return [
        (hours[hour], hours[hour + 1])
        for hour in range(entrance_index, exit_index)
    ]


def exclude_existing(
    candidates: Iterable[ShiftSlot],
    already_persisted: Iterable[ShiftSlot]
) -> Set[ShiftSlot]:
    """Candidates that are not already stored."""
    return set(candidates) - set(already_persisted)


class ShiftSetBuilder:
    """Builds the set of new shifts to store for a submission."""

    def __init__(
        self,
        week_service: Optional[WeekService] = None,
        catalog: Optional[TaskCatalog] = None
    ):
        """
        Initialize shift set builder.

        Args:
            week_service: Calendar used to resolve day selectors
            catalog: Task catalog, defaults to the configured one
        """
        self.week_service = week_service or WeekService()
        self.catalog = catalog or get_task_catalog()

    def validate_hours(self, submission: ShiftSubmission) -> Optional[HourRangeError]:
        """
        Check that every selected hour range is a non-empty forward interval.

        Weeks are checked current first, then days and slots in ascending
        order; the first offending slot is reported.

        Returns:
            The first hour range error found, or None when every slot is valid
        """
        if self.catalog.fixed_hours:
            return None

        for is_current_week, week in submission.weeks():
            for day_index in week.selected_days():
                for slot_index, _task, entrance, exit_ in week.days[day_index].slots():
                    if entrance is None or exit_ is None:
                        continue
                    if entrance == exit_:
                        return EqualHoursError(
                            is_current_week, day_index, slot_index,
                            HOURS[entrance], HOURS[exit_]
                        )
                    if entrance > exit_:
                        return EntranceAfterExitError(
                            is_current_week, day_index, slot_index,
                            HOURS[entrance], HOURS[exit_]
                        )
        return None

    def resolve_dates(self, submission: ShiftSubmission) -> Dict[DayKey, date]:
        """
        Map every selected day to its calendar date.

        Sentinel and out-of-range day indices are skipped, and so are days of
        the current week that are already over.
        """
        today = self.week_service.current_date()
        resolved: Dict[DayKey, date] = {}
        for is_current_week, week in submission.weeks():
            for day_index in week.days:
                try:
                    shift_date = self.week_service.resolve_day(is_current_week, day_index)
                except InvalidDayIndexError:
                    logger.debug(
                        f"Skipping day index {day_index} (current week: {is_current_week}) "
                        f"for card {submission.card_id}"
                    )
                    continue
                if shift_date < today:
                    logger.debug(
                        f"Skipping past day {shift_date} for card {submission.card_id}"
                    )
                    continue
                resolved[(is_current_week, day_index)] = shift_date
        return resolved

    def build_candidate_shifts(
        self,
        submission: ShiftSubmission,
        resolved_dates: Dict[DayKey, date]
    ) -> Set[ShiftSlot]:
        """
        Build every shift described by the submission.

        Variable-hour tasks are split into one shift per hour; fixed-hour
        tasks produce a single shift. Days missing from ``resolved_dates``
        and task keys unknown to the catalog are skipped.
        """
        shifts: Set[ShiftSlot] = set()
        for is_current_week, week in submission.weeks():
            for day_index in week.selected_days():
                shift_date = resolved_dates.get((is_current_week, day_index))
                if shift_date is None:
                    continue
                for _slot, task, entrance, exit_ in week.days[day_index].slots():
                    if task not in self.catalog:
                        continue
                    if self.catalog.fixed_hours:
                        shifts.add(ShiftSlot(shift_date, task, submission.card_id))
                        continue
                    if entrance is None or exit_ is None:
                        continue
                    for start, end in split_hour_range(entrance, exit_):
                        shifts.add(ShiftSlot(shift_date, task, submission.card_id, start, end))
        return shifts

    def evaluate(
        self,
        submission: ShiftSubmission,
        already_persisted: Iterable[ShiftSlot]
    ) -> SubmissionOutcome:
        """Run a submission through validation, date resolution and diffing."""
        outcome = SubmissionOutcome()

        error = self.validate_hours(submission)
        if error is not None:
            logger.info(f"Rejected submission for card {submission.card_id}: {error.error_code}")
            outcome.error = error
            outcome.advance(SubmissionState.REJECTED)
            return outcome
        outcome.advance(SubmissionState.VALIDATED)

        resolved_dates = self.resolve_dates(submission)
        candidates = self.build_candidate_shifts(submission, resolved_dates)
        outcome.shifts = exclude_existing(candidates, already_persisted)
        outcome.advance(SubmissionState.DIFFED)
        logger.debug(
            f"Card {submission.card_id}: {len(candidates)} candidate shifts, "
            f"{len(outcome.shifts)} new"
        )

        outcome.advance(SubmissionState.READY)
        return outcome

    def create_shifts(
        self,
        submission: ShiftSubmission,
        already_persisted: Iterable[ShiftSlot]
    ) -> Set[ShiftSlot]:
        """
        Compute the new shifts to store for a submission.

        Args:
            submission: Parsed booking form
            already_persisted: The volunteer's stored shifts

        Returns:
            Shifts to insert; may be empty

        Raises:
            HourRangeError: If any selected hour range is invalid
        """
        outcome = self.evaluate(submission, already_persisted)
        if outcome.state == SubmissionState.REJECTED:
            raise outcome.error
        return outcome.shifts
