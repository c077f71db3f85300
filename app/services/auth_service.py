"""Authentication service for volunteer and administrator logins."""
from sqlalchemy.orm import Session
from typing import Optional
import hashlib
import logging
import secrets

from app.config import settings
from app.exceptions import AuthenticationError, MissingFieldError
from app.models.volunteer import Volunteer


logger = logging.getLogger(__name__)


def capitalize(value: str) -> str:
    """Uppercase the first letter only, leaving the rest untouched."""
    if not value:
        return value
    return value[0].upper() + value[1:]


class AuthService:
    """Service for handling authentication operations."""

    def __init__(self, db: Session, admin_password_hash: Optional[str] = None):
        """
        Initialize authentication service.

        Args:
            db: Database session
            admin_password_hash: Override for ``settings.admin_password_hash``
        """
        self.db = db
        self.admin_password_hash = (
            settings.admin_password_hash if admin_password_hash is None else admin_password_hash
        )

    def _require_enabled_volunteer(self, card_id: int) -> Volunteer:
        volunteer = self.db.get(Volunteer, card_id)
        if not volunteer:
            raise AuthenticationError("card_id", card_id=card_id)
        if volunteer.disabled:
            raise AuthenticationError("card_id_disabled", card_id=card_id)
        return volunteer

    def authenticate_volunteer(self, card_id: int, surname: str) -> Volunteer:
        """
        Authenticate a volunteer by card number and surname.

        The surname is trimmed and its first letter capitalized before the
        lookup.

        Args:
            card_id: Membership card number
            surname: Surname as typed by the volunteer

        Returns:
            The authenticated Volunteer

        Raises:
            MissingFieldError: If the surname is empty
            AuthenticationError: If the card is unknown or disabled, the
                surname is unknown, or it belongs to another card
        """
        surname = capitalize((surname or "").strip())
        if not surname:
            raise MissingFieldError("surname")

        volunteer = self._require_enabled_volunteer(card_id)

        surname_exists = self.db.query(Volunteer).filter(
            Volunteer.surname == surname
        ).first() is not None
        if not surname_exists:
            raise AuthenticationError("surname", card_id=card_id, surname=surname)

        if volunteer.surname != surname:
            raise AuthenticationError("card_id_wrong_surname", card_id=card_id, surname=surname)

        return volunteer

    def authenticate_admin(self, card_id: int, password: str) -> Volunteer:
        """
        Authenticate an administrator.

        Administrators are enabled volunteers who know the shared
        administration password.

        Raises:
            AuthenticationError: If the card is unknown or disabled, or the
                password is wrong
        """
        volunteer = self._require_enabled_volunteer(card_id)

        if not self.verify_password(password, self.admin_password_hash):
            logger.warning(f"Failed administration login for card {card_id}")
            raise AuthenticationError("wrong_password", card_id=card_id)

        return volunteer

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash a password using PBKDF2-HMAC-SHA256.

        Args:
            password: Plain text password

        Returns:
            Hashed password in format: salt$hash
        """
        if not password:
            raise ValueError("Password is required")

        salt = secrets.token_hex(32)
        pwd_hash = hashlib.pbkdf2_hmac(
            'sha256',
            password.encode('utf-8'),
            salt.encode('utf-8'),
            100000
        )
        return f"{salt}${pwd_hash.hex()}"

    @staticmethod
    def verify_password(password: str, hashed_password: str) -> bool:
        """
        Verify a password against a hashed password.

        Args:
            password: Plain text password to verify
            hashed_password: Hashed password in format: salt$hash

        Returns:
            True if password matches, False otherwise
        """
        if not password or not hashed_password:
            return False

        try:
            salt, stored_hash = hashed_password.split('$')
            pwd_hash = hashlib.pbkdf2_hmac(
                'sha256',
                password.encode('utf-8'),
                salt.encode('utf-8'),
                100000
            )
            return secrets.compare_digest(pwd_hash.hex(), stored_hash)
        except (ValueError, AttributeError):
            return False
