"""Shift booking service backed by the database."""
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Any, Dict, Iterable, List, Optional, Set
from datetime import date
import logging

from app.exceptions import AuthenticationError, ResourceNotFoundError, StorageError
from app.models.shift import Shift, ShiftSlot
from app.models.task import hour_intervals
from app.models.volunteer import Volunteer
from app.services.notification_service import ChangeNotifier, notifier as default_notifier
from app.services.shift_builder import ShiftSetBuilder, ShiftSubmission
from app.services.week_service import WeekService


logger = logging.getLogger(__name__)


class ShiftService:
    """Service for reading, booking and removing shifts."""

    def __init__(
        self,
        db: Session,
        builder: Optional[ShiftSetBuilder] = None,
        notifier: Optional[ChangeNotifier] = None
    ):
        """
        Initialize shift service.

        Args:
            db: Database session
            builder: Shift set builder, defaults to one on the wall clock
            notifier: Refresh broadcaster, defaults to the global one
        """
        self.db = db
        self.builder = builder or ShiftSetBuilder()
        self.notifier = notifier or default_notifier

    @property
    def week_service(self) -> WeekService:
        return self.builder.week_service

    def fetch_current_shifts(self, card_id: int) -> Set[ShiftSlot]:
        """
        Get every stored shift of a volunteer as structural values.

        Raises:
            StorageError: If the shifts cannot be read
        """
        try:
            shifts = self.db.query(Shift).filter(Shift.card_id == card_id).all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read shifts for card {card_id}: {e}") from e
        return {shift.to_slot() for shift in shifts}

    def insert_shifts(self, shifts: Iterable[ShiftSlot]) -> List[Shift]:
        """
        Store shifts in a single transaction.

        Args:
            shifts: Shifts to insert

        Returns:
            The inserted Shift rows

        Raises:
            StorageError: If the insert fails; nothing is stored in that case
        """
        rows = [Shift.from_slot(slot) for slot in shifts]
        if not rows:
            return []

        for row in rows:
            row.validate()

        try:
            self.db.add_all(rows)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Failed to insert shifts: {e}") from e

        for row in rows:
            self.db.refresh(row)

        logger.info(f"Inserted {len(rows)} shifts")
        self.notifier.notify()
        return rows

    def delete_shift(self, shift_id: int, card_id: Optional[int] = None) -> None:
        """
        Delete a stored shift by id.

        Args:
            shift_id: Storage id of the shift
            card_id: When given, the shift must belong to this volunteer

        Raises:
            ResourceNotFoundError: If no such shift exists
            StorageError: If the delete fails
        """
        try:
            shift = self.db.query(Shift).filter(Shift.id == shift_id).first()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read shift {shift_id}: {e}") from e
        if not shift or (card_id is not None and shift.card_id != card_id):
            raise ResourceNotFoundError("shift", shift_id)

        try:
            self.db.delete(shift)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Failed to delete shift {shift_id}: {e}") from e

        logger.info(f"Deleted shift {shift_id} of card {shift.card_id}")
        self.notifier.notify()

    def submit_shifts(self, submission: ShiftSubmission) -> List[Shift]:
        """
        Book the shifts of a submission that are not stored yet.

        Args:
            submission: Parsed booking form

        Returns:
            Newly stored Shift rows, empty when everything was already booked

        Raises:
            ResourceNotFoundError: If the volunteer does not exist
            AuthenticationError: If the volunteer is disabled
            HourRangeError: If any hour range is invalid
            StorageError: If reading or writing shifts fails
        """
        volunteer = self.db.get(Volunteer, submission.card_id)
        if not volunteer:
            raise ResourceNotFoundError("volunteer", submission.card_id)
        if volunteer.disabled:
            raise AuthenticationError("card_id_disabled", card_id=submission.card_id)

        current_shifts = self.fetch_current_shifts(submission.card_id)
        new_shifts = self.builder.create_shifts(submission, current_shifts)
        return self.insert_shifts(new_shifts)

    def get_volunteer_shifts(self, card_id: int) -> List[Shift]:
        """Stored shifts of a volunteer ordered by date and entrance hour."""
        return self.db.query(Shift).filter(
            Shift.card_id == card_id
        ).order_by(
            Shift.shift_date.asc(),
            Shift.entrance_hour.asc(),
            Shift.task.asc()
        ).all()

    def get_roster(self, shift_date: date) -> List[Dict[str, Any]]:
        """
        Volunteers booked on a date, grouped by task.

        With variable-hour tasks each task is further split per one-hour
        interval; with fixed-hour tasks there is one entry per task.

        Args:
            shift_date: Date to show

        Returns:
            List of dictionaries with task name, hours and volunteer names
        """
        rows = self.db.query(Shift, Volunteer).join(
            Volunteer, Shift.card_id == Volunteer.card_id
        ).filter(
            Shift.shift_date == shift_date
        ).order_by(Volunteer.surname.asc(), Volunteer.name.asc()).all()

        booked: Dict[tuple, List[str]] = {}
        for shift, volunteer in rows:
            key = (shift.task, shift.entrance_hour, shift.exit_hour)
            booked.setdefault(key, []).append(volunteer.full_name)

        catalog = self.builder.catalog
        roster = []
        for task in catalog:
            if catalog.fixed_hours:
                roster.append({
                    "task": task.key,
                    "task_name": task.name,
                    "task_hours": task.hours,
                    "volunteers": booked.get((task.key, "", ""), [])
                })
                continue
            for entrance, exit_ in hour_intervals():
                roster.append({
                    "task": task.key,
                    "task_name": task.name,
                    "task_hours": f"{entrance} - {exit_}",
                    "volunteers": booked.get((task.key, entrance, exit_), [])
                })
        return roster

    def purge_past_shifts(self, today: Optional[date] = None) -> int:
        """
        Delete shifts dated before today.

        Args:
            today: Reference date, defaults to the current bookable date

        Returns:
            Number of deleted shifts
        """
        today = today or self.week_service.current_date()
        try:
            deleted = self.db.query(Shift).filter(
                Shift.shift_date < today
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Failed to purge past shifts: {e}") from e

        if deleted:
            logger.info(f"Purged {deleted} shifts older than {today}")
        return deleted

    def get_all_volunteer_shifts(self) -> List[Dict[str, Any]]:
        """
        Every volunteer with their shifts, ordered by card id.

        Disabled volunteers are listed without shifts.
        """
        volunteers = self.db.query(Volunteer).order_by(Volunteer.card_id.asc()).all()

        result = []
        for volunteer in volunteers:
            result.append({
                "volunteer": volunteer,
                "shifts": None if volunteer.disabled else self.get_volunteer_shifts(volunteer.card_id)
            })
        return result
