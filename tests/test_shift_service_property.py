"""
Property-based tests for storing submissions.
"""
import pytest
from hypothesis import given, strategies as st, settings, HealthCheck
from unittest.mock import MagicMock

from app.models.shift import Shift
from app.models.task import get_task_catalog
from app.models.volunteer import Volunteer
from app.services.notification_service import ChangeNotifier
from app.services.shift_builder import DaySelection, ShiftSetBuilder, ShiftSubmission, WeekSelection
from app.services.shift_service import ShiftService
from app.services.week_service import WeekService
from tests.conftest import fixed_clock, get_test_db_session


fixed_days = st.dictionaries(
    st.integers(min_value=0, max_value=5),
    st.lists(st.integers(min_value=0, max_value=4), min_size=1, max_size=4).map(
        lambda tasks: DaySelection(tasks, [None] * len(tasks), [None] * len(tasks))
    ),
    max_size=4
)


@pytest.mark.property
@settings(max_examples=50, deadline=None, suppress_health_check=[HealthCheck.too_slow])
@given(current=fixed_days, next_=fixed_days)
def test_stored_shifts_are_unique_and_resubmission_is_noop(current, next_):
    """
    Every distinct (day, task) pair from today on is stored once; submitting
    the same form again stores nothing.
    """
    with get_test_db_session() as db:
        db.add(Volunteer(card_id=7, surname="Rossi", name="Mario"))
        db.commit()

        builder = ShiftSetBuilder(
            WeekService(clock=fixed_clock(2024, 1, 3)),
            get_task_catalog(fixed_hours=True)
        )
        service = ShiftService(db, builder=builder, notifier=MagicMock(spec=ChangeNotifier))
        submission = ShiftSubmission(
            card_id=7,
            current=WeekSelection(days=current),
            next=WeekSelection(days=next_)
        )

        # Monday and Tuesday of the current week are already over
        expected = sum(len(set(day.tasks)) for index, day in current.items() if index >= 2) + \
            sum(len(set(day.tasks)) for day in next_.values())

        assert len(service.submit_shifts(submission)) == expected
        assert service.submit_shifts(submission) == []
        assert db.query(Shift).count() == expected
