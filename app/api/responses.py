"""Shared JSON response helpers for the API routers."""
from fastapi.responses import JSONResponse
from typing import Any, Dict

from app.exceptions import (
    AuthenticationError,
    ResourceNotFoundError,
    ValidationError,
    format_error_for_api,
    internal_error_body,
)
from app.models.shift import Shift
from app.models.task import TaskCatalog
from app.models.volunteer import Volunteer
from app.services.week_service import WeekService


def error_response(error: ValidationError) -> JSONResponse:
    """JSON error envelope with a status code matching the error type."""
    if isinstance(error, AuthenticationError):
        status_code = 401
    elif isinstance(error, ResourceNotFoundError):
        status_code = 404
    else:
        status_code = 400
    return JSONResponse(status_code=status_code, content=format_error_for_api(error))


def internal_error_response() -> JSONResponse:
    return JSONResponse(status_code=500, content=internal_error_body())


def shift_to_dict(shift: Shift, catalog: TaskCatalog) -> Dict[str, Any]:
    """Serialize a stored shift for display."""
    task = catalog.get(shift.task)
    if shift.entrance_hour:
        entrance_hour, exit_hour = shift.entrance_hour, shift.exit_hour
    elif task is not None and task.has_fixed_hours:
        entrance_hour, exit_hour = task.entrance_hour, task.exit_hour
    else:
        entrance_hour = exit_hour = None
    return {
        "id": shift.id,
        "shift_date": shift.shift_date.isoformat(),
        "date": WeekService.format_date(shift.shift_date),
        "day": WeekService.day_name(shift.shift_date),
        "task": shift.task,
        "task_name": catalog.name(shift.task),
        "entrance_hour": entrance_hour,
        "exit_hour": exit_hour,
        "card_id": shift.card_id
    }


def volunteer_to_dict(volunteer: Volunteer) -> Dict[str, Any]:
    return {
        "card_id": volunteer.card_id,
        "surname": volunteer.surname,
        "name": volunteer.name,
        "fiscal_code": volunteer.fiscal_code,
        "disabled": volunteer.disabled
    }
