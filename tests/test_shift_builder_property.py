"""
Property-based tests for the shift set builder.
"""
import pytest
from hypothesis import given, strategies as st, settings
from datetime import date

from app.exceptions import HourRangeError
from app.models.task import HOURS, get_task_catalog
from app.services.shift_builder import (
    DaySelection,
    ShiftSetBuilder,
    ShiftSubmission,
    WeekSelection,
    split_hour_range,
)
from app.services.week_service import WeekService
from tests.conftest import fixed_clock


hour_indices = st.integers(min_value=0, max_value=len(HOURS) - 1)
task_keys = st.sampled_from([0, 1, 2, 3])


@st.composite
def day_selections(draw, valid_only: bool = False):
    size = draw(st.integers(min_value=1, max_value=3))
    tasks, entrances, exits = [], [], []
    for _ in range(size):
        entrance = draw(hour_indices)
        if valid_only:
            exit_ = draw(st.integers(min_value=entrance + 1, max_value=len(HOURS) - 1)) \
                if entrance < len(HOURS) - 1 else None
        else:
            exit_ = draw(hour_indices)
        tasks.append(draw(task_keys))
        entrances.append(entrance if exit_ is not None else None)
        exits.append(exit_)
    return DaySelection(tasks, entrances, exits)


@st.composite
def submissions(draw, valid_only: bool = False):
    days = st.dictionaries(
        st.integers(min_value=0, max_value=5),
        day_selections(valid_only=valid_only),
        max_size=3
    )
    return ShiftSubmission(
        card_id=7,
        current=WeekSelection(days=draw(days)),
        next=WeekSelection(days=draw(days))
    )


def make_builder() -> ShiftSetBuilder:
    return ShiftSetBuilder(
        WeekService(clock=fixed_clock(2024, 1, 3)),
        get_task_catalog(fixed_hours=False)
    )


def has_invalid_range(sub: ShiftSubmission) -> bool:
    for _week, selection in sub.weeks():
        for day in selection.days.values():
            for _slot, _task, entrance, exit_ in day.slots():
                if entrance is not None and exit_ is not None and entrance >= exit_:
                    return True
    return False


@pytest.mark.property
@settings(max_examples=100)
@given(entrance=hour_indices, exit_=hour_indices)
def test_split_covers_range_contiguously(entrance: int, exit_: int):
    """Splitting yields exit - entrance contiguous one-hour intervals."""
    intervals = split_hour_range(entrance, exit_)

    assert len(intervals) == max(exit_ - entrance, 0)
    if intervals:
        assert intervals[0][0] == HOURS[entrance]
        assert intervals[-1][1] == HOURS[exit_]
    for (_start, end), (next_start, _end) in zip(intervals, intervals[1:]):
        assert end == next_start


@pytest.mark.property
@settings(max_examples=100)
@given(sub=submissions())
def test_invalid_ranges_always_reject(sub: ShiftSubmission):
    """A submission is rejected exactly when some selected range is not forward."""
    builder = make_builder()

    if has_invalid_range(sub):
        with pytest.raises(HourRangeError):
            builder.create_shifts(sub, set())
    else:
        builder.create_shifts(sub, set())


@pytest.mark.property
@settings(max_examples=100)
@given(sub=submissions(valid_only=True))
def test_resubmission_is_idempotent(sub: ShiftSubmission):
    """Submitting again after storing the result books nothing."""
    builder = make_builder()

    first = builder.create_shifts(sub, set())
    assert builder.create_shifts(sub, first) == set()


@pytest.mark.property
@settings(max_examples=100)
@given(sub=submissions(valid_only=True))
def test_shifts_are_one_hour_and_in_window(sub: ShiftSubmission):
    """Every built shift is a one-hour slot of the volunteer from today to next Saturday."""
    shifts = make_builder().create_shifts(sub, set())

    for shift in shifts:
        assert shift.card_id == 7
        assert date(2024, 1, 3) <= shift.shift_date <= date(2024, 1, 13)
        assert shift.shift_date.weekday() != 6
        assert HOURS.index(shift.exit_hour) == HOURS.index(shift.entrance_hour) + 1
