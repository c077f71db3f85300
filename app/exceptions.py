"""Custom exceptions and error handling for the volunteer shift system.

This module provides user-friendly error messages for validation errors.
Messages are in Italian, the language volunteers use.
"""
from typing import Optional, Dict, Any


# Human-readable names of the two bookable week windows
WEEK_NAMES = {
    True: "settimana corrente",
    False: "settimana prossima",
}


class ValidationError(Exception):
    """Base class for validation errors with user-friendly messages."""

    def __init__(self, message: str, error_code: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize validation error.

        Args:
            message: User-friendly error message
            error_code: Machine-readable error code
            details: Optional additional error details
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary format for API responses.

        Returns:
            Dictionary with error information
        """
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


class HourRangeError(ValidationError):
    """Error raised when a selected hour range is not a valid interval."""

    def __init__(
        self,
        message: str,
        error_code: str,
        is_current_week: bool,
        day_index: int,
        slot_index: int,
        entrance_hour: str,
        exit_hour: str
    ):
        """
        Initialize hour range error.

        Args:
            message: User-friendly error message
            error_code: Machine-readable error code
            is_current_week: Whether the offending day is in the current week
            day_index: Day index within the week (0=Monday)
            slot_index: Task slot index within the day
            entrance_hour: Entrance hour label
            exit_hour: Exit hour label
        """
        self.is_current_week = is_current_week
        week = WEEK_NAMES[is_current_week]
        super().__init__(
            message=f"{message} ({week})",
            error_code=error_code,
            details={
                "week": "current" if is_current_week else "next",
                "day_index": day_index,
                "slot_index": slot_index,
                "entrance_hour": entrance_hour,
                "exit_hour": exit_hour
            }
        )


class EqualHoursError(HourRangeError):
    """Error raised when entrance and exit hours coincide."""

    def __init__(
        self,
        is_current_week: bool,
        day_index: int,
        slot_index: int,
        entrance_hour: str,
        exit_hour: str
    ):
        message = (
            f"L'ora di entrata \"{entrance_hour}\" è uguale "
            f"all'ora di uscita \"{exit_hour}\""
        )
        super().__init__(
            message, "EQUAL_HOURS", is_current_week, day_index, slot_index,
            entrance_hour, exit_hour
        )


class EntranceAfterExitError(HourRangeError):
    """Error raised when the entrance hour follows the exit hour."""

    def __init__(
        self,
        is_current_week: bool,
        day_index: int,
        slot_index: int,
        entrance_hour: str,
        exit_hour: str
    ):
        message = (
            f"L'ora di entrata \"{entrance_hour}\" è maggiore "
            f"dell'ora di uscita \"{exit_hour}\""
        )
        super().__init__(
            message, "ENTRANCE_AFTER_EXIT", is_current_week, day_index, slot_index,
            entrance_hour, exit_hour
        )


class InvalidDayIndexError(ValidationError):
    """Error raised when a day selector is the sentinel or out of range."""

    def __init__(self, day_index: int):
        """
        Initialize invalid day index error.

        Args:
            day_index: The rejected day index
        """
        super().__init__(
            message=f"Giorno non valido: {day_index}",
            error_code="INVALID_DAY_INDEX",
            details={"day_index": day_index}
        )


class MissingFieldError(ValidationError):
    """Error raised when a required field is missing."""

    def __init__(self, field_name: str):
        """
        Initialize missing field error.

        Args:
            field_name: Name of the missing field
        """
        field_names_it = {
            "card_id": "Numero tessera",
            "surname": "Cognome",
            "name": "Nome",
            "password": "Password"
        }

        field_display = field_names_it.get(field_name, field_name)
        message = f"{field_display}: campo obbligatorio."

        super().__init__(
            message=message,
            error_code="MISSING_FIELD",
            details={"field_name": field_name}
        )


class ResourceNotFoundError(ValidationError):
    """Error raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: Any):
        """
        Initialize resource not found error.

        Args:
            resource_type: Type of resource (e.g., "volunteer", "shift")
            resource_id: ID of the resource
        """
        resource_types_it = {
            "volunteer": "Volontario",
            "shift": "Turno"
        }

        resource_display = resource_types_it.get(resource_type, resource_type)
        message = f"{resource_display} non trovato. (ID: {resource_id})"

        super().__init__(
            message=message,
            error_code="RESOURCE_NOT_FOUND",
            details={
                "resource_type": resource_type,
                "resource_id": resource_id
            }
        )


class DuplicateVolunteerError(ValidationError):
    """Error raised when a card number is already registered."""

    def __init__(self, card_id: int):
        super().__init__(
            message=f"Il numero di tessera \"{card_id}\" esiste già",
            error_code="DUPLICATE_VOLUNTEER",
            details={"card_id": card_id}
        )


class InvalidRangeError(ValidationError):
    """Error raised when a value is outside the valid range."""

    def __init__(self, field_name: str, value: Any, min_value: Any, max_value: Any):
        """
        Initialize invalid range error.

        Args:
            field_name: Name of the field
            value: The invalid value
            min_value: Minimum valid value
            max_value: Maximum valid value
        """
        field_names_it = {
            "entrance_hour": "Ora di entrata",
            "exit_hour": "Ora di uscita",
            "day": "Giorno",
            "task": "Mansione",
            "slot": "Turno"
        }

        field_display = field_names_it.get(field_name, field_name)
        message = (
            f"{field_display} deve essere compreso tra {min_value} e {max_value}.\n"
            f"Valore indicato: {value}"
        )

        super().__init__(
            message=message,
            error_code="INVALID_RANGE",
            details={
                "field_name": field_name,
                "value": value,
                "min_value": min_value,
                "max_value": max_value
            }
        )


class AuthenticationError(ValidationError):
    """Error raised when login credentials are rejected."""

    REASONS = {
        "card_id": "Il numero di tessera \"{card_id}\" non esiste",
        "card_id_disabled": "Il numero di tessera \"{card_id}\" è disabilitato",
        "surname": "Il cognome \"{surname}\" non esiste",
        "card_id_wrong_surname": (
            "Il cognome \"{surname}\" non è associato al numero di tessera \"{card_id}\""
        ),
        "wrong_password": "La password inserita non è corretta",
    }

    def __init__(self, reason: str, card_id: Optional[int] = None, surname: Optional[str] = None):
        """
        Initialize authentication error.

        Args:
            reason: Key of ``REASONS`` describing the failure
            card_id: Card number entered by the user
            surname: Surname entered by the user
        """
        message = self.REASONS[reason].format(card_id=card_id, surname=surname)
        super().__init__(
            message=message,
            error_code="AUTHENTICATION_FAILED",
            details={"reason": reason}
        )
        self.reason = reason


class StorageError(Exception):
    """Error raised when the shift storage cannot be read or written."""


def format_error_for_api(error: ValidationError) -> Dict[str, Any]:
    """
    Format validation error for API response.

    Args:
        error: Validation error to format

    Returns:
        Dictionary suitable for JSON API response
    """
    return error.to_dict()


def internal_error_body() -> Dict[str, Any]:
    """Generic body returned when a request fails for a non-user reason."""
    return {
        "success": False,
        "error": {
            "code": "INTERNAL_ERROR",
            "message": "Si è verificato un errore di sistema.",
            "details": {}
        }
    }
