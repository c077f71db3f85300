"""Volunteer roster management service."""
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.exceptions import DuplicateVolunteerError, MissingFieldError, ResourceNotFoundError
from app.models.volunteer import Volunteer


logger = logging.getLogger(__name__)


class VolunteerService:
    """Service for handling volunteer records."""

    def __init__(self, db: Session):
        """
        Initialize volunteer service.

        Args:
            db: Database session
        """
        self.db = db

    def get_volunteer(self, card_id: int) -> Optional[Volunteer]:
        return self.db.get(Volunteer, card_id)

    def require_volunteer(self, card_id: int) -> Volunteer:
        """
        Get a volunteer or fail.

        Raises:
            ResourceNotFoundError: If the card number is unknown
        """
        volunteer = self.get_volunteer(card_id)
        if not volunteer:
            raise ResourceNotFoundError("volunteer", card_id)
        return volunteer

    def list_volunteers(self) -> List[Volunteer]:
        """All volunteers ordered by card number."""
        return self.db.query(Volunteer).order_by(Volunteer.card_id.asc()).all()

    def create_volunteer(
        self,
        card_id: int,
        surname: str,
        name: str,
        fiscal_code: str = "",
        disabled: bool = False
    ) -> Volunteer:
        """
        Register a new volunteer.

        Args:
            card_id: Membership card number
            surname: Surname
            name: First name
            fiscal_code: Fiscal code
            disabled: Whether the volunteer is disabled

        Returns:
            Newly created Volunteer object

        Raises:
            MissingFieldError: If surname or name is empty
            DuplicateVolunteerError: If the card number is already registered
        """
        if not surname or not surname.strip():
            raise MissingFieldError("surname")
        if not name or not name.strip():
            raise MissingFieldError("name")

        if self.get_volunteer(card_id):
            raise DuplicateVolunteerError(card_id)

        volunteer = Volunteer(
            card_id=card_id,
            surname=surname.strip(),
            name=name.strip(),
            fiscal_code=fiscal_code.strip(),
            disabled=disabled
        )
        volunteer.validate()

        self.db.add(volunteer)
        self.db.commit()
        self.db.refresh(volunteer)

        logger.info(f"Registered volunteer {card_id}")
        return volunteer

    def update_volunteer(
        self,
        card_id: int,
        surname: Optional[str] = None,
        name: Optional[str] = None,
        fiscal_code: Optional[str] = None,
        disabled: Optional[bool] = None
    ) -> Volunteer:
        """
        Update the given fields of a volunteer.

        Raises:
            ResourceNotFoundError: If the card number is unknown
        """
        volunteer = self.require_volunteer(card_id)

        if surname is not None:
            volunteer.surname = surname.strip()
        if name is not None:
            volunteer.name = name.strip()
        if fiscal_code is not None:
            volunteer.fiscal_code = fiscal_code.strip()
        if disabled is not None:
            volunteer.disabled = disabled

        volunteer.validate()
        self.db.commit()
        self.db.refresh(volunteer)
        return volunteer

    def set_disabled(self, card_id: int, disabled: bool) -> Volunteer:
        return self.update_volunteer(card_id, disabled=disabled)

    def delete_volunteer(self, card_id: int) -> None:
        """
        Delete a volunteer together with their shifts.

        Raises:
            ResourceNotFoundError: If the card number is unknown
        """
        volunteer = self.require_volunteer(card_id)
        self.db.delete(volunteer)
        self.db.commit()
        logger.info(f"Deleted volunteer {card_id}")

    def get_display_name(self, card_id: int, is_admin: bool = False) -> str:
        """
        Heading shown on the booking page.

        Administrators see ``(card) Surname Name``, volunteers a greeting.
        """
        volunteer = self.require_volunteer(card_id)
        if is_admin:
            return f"({card_id}) {volunteer.surname} {volunteer.name}"
        return f"Ciao {volunteer.name}!"
