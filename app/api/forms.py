"""Parsing of the booking form into a shift submission."""
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
import re

from app.exceptions import InvalidRangeError, MissingFieldError, ValidationError
from app.models.task import FAKE_TASK_VALUE, HOURS, MAX_SLOTS
from app.services.shift_builder import DaySelection, ShiftSubmission, WeekSelection


# e.g. "curr.checkboxes[2]" or "next.entranceHours[4][1]"
FIELD_PATTERN = re.compile(
    r"^(?P<week>curr|next)\.(?P<kind>checkboxes|tasks|entranceHours|exitHours)"
    r"\[(?P<day>\d{1,3})\](?:\[(?P<slot>\d+)\])?$"
)

SLOT_FIELDS = {
    "tasks": "tasks",
    "entranceHours": "entrance_hours",
    "exitHours": "exit_hours",
}


class FormDataError(ValidationError):
    """Error raised when a form field is not a valid number."""

    def __init__(self, field_name: str, value: str):
        super().__init__(
            message=f"Valore non valido per il campo \"{field_name}\": {value}",
            error_code="INVALID_FORM_DATA",
            details={"field_name": field_name, "value": value}
        )


def _to_int(field_name: str, value: str) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise FormDataError(field_name, value)


def _check_hour(field_name: str, value: int) -> int:
    if not 0 <= value < len(HOURS):
        raise InvalidRangeError(
            "entrance_hour" if field_name.endswith("entranceHours") else "exit_hour",
            value, 0, len(HOURS) - 1
        )
    return value


def _slot_list(values: Dict[int, int], size: int, missing) -> List:
    return [values.get(slot, missing) for slot in range(size)]


def parse_shift_form(
    form: Iterable[Tuple[str, str]],
    card_id: Optional[int] = None
) -> ShiftSubmission:
    """
    Build a shift submission from form fields.

    Only days whose checkbox is present are selected. Unknown field names are
    ignored.

    Args:
        form: ``(name, value)`` pairs of the submitted form
        card_id: Card number, read from the ``card_id`` field when omitted

    Returns:
        ShiftSubmission for the current and the next week

    Raises:
        MissingFieldError: If no card number is available
        FormDataError: If a numeric field does not parse
        InvalidRangeError: If an hour index is outside the hour table or a
            slot index is not below ``MAX_SLOTS``
    """
    checked: Dict[str, set] = {"curr": set(), "next": set()}
    # week -> day -> kind -> slot -> value
    slots: Dict[str, Dict[int, Dict[str, Dict[int, int]]]] = {"curr": {}, "next": {}}

    for name, value in form:
        if name == "card_id":
            if card_id is None:
                card_id = _to_int(name, value)
            continue

        match = FIELD_PATTERN.match(name)
        if not match:
            continue

        week = match.group("week")
        kind = match.group("kind")
        day = int(match.group("day"))

        if kind == "checkboxes":
            checked[week].add(day)
            continue

        if match.group("slot") is None:
            raise FormDataError(name, value)
        slot_text = match.group("slot")
        if len(slot_text) > len(str(MAX_SLOTS)) or int(slot_text) >= MAX_SLOTS:
            raise InvalidRangeError("slot", slot_text, 0, MAX_SLOTS - 1)
        slot = int(slot_text)
        number = _to_int(name, value)
        if kind != "tasks":
            number = _check_hour(name, number)

        day_slots = slots[week].setdefault(day, {})
        day_slots.setdefault(SLOT_FIELDS[kind], {})[slot] = number

    if card_id is None:
        raise MissingFieldError("card_id")

    weeks = {}
    for week in ("curr", "next"):
        days = {}
        for day in checked[week]:
            fields = slots[week].get(day, {})
            size = max((max(values) + 1 for values in fields.values() if values), default=0)
            days[day] = DaySelection(
                tasks=_slot_list(fields.get("tasks", {}), size, FAKE_TASK_VALUE),
                entrance_hours=_slot_list(fields.get("entrance_hours", {}), size, None),
                exit_hours=_slot_list(fields.get("exit_hours", {}), size, None)
            )
        weeks[week] = WeekSelection(days=days)

    return ShiftSubmission(card_id=card_id, current=weeks["curr"], next=weeks["next"])


def form_items(form: Mapping) -> List[Tuple[str, str]]:
    """``(name, value)`` pairs of a Starlette form or a plain mapping."""
    if hasattr(form, "multi_items"):
        return list(form.multi_items())
    return list(form.items())
