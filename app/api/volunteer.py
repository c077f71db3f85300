"""Volunteer web interface routes."""
from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import JSONResponse, StreamingResponse
from sqlalchemy.orm import Session
from typing import Optional
import logging

from app.api.forms import form_items, parse_shift_form
from app.api.responses import (
    error_response,
    internal_error_response,
    shift_to_dict,
)
from app.api.sessions import (
    SessionData,
    create_session,
    end_session,
    get_current_session,
    require_card_access,
)
from app.config import settings
from app.database import get_db
from app.exceptions import StorageError, ValidationError
from app.models.task import (
    FAKE_DAY_VALUE,
    FAKE_TASK_VALUE,
    MAX_SLOTS,
    entrance_hour_choices,
    exit_hour_choices,
    get_task_catalog,
)
from app.services.auth_service import AuthService
from app.services.notification_service import notifier
from app.services.shift_builder import ShiftSetBuilder
from app.services.shift_service import ShiftService
from app.services.volunteer_service import VolunteerService
from app.services.week_service import WeekService


logger = logging.getLogger(__name__)

# Create router
router = APIRouter(tags=["volunteer"])


def get_week_service() -> WeekService:
    """Dependency providing the calendar on the wall clock."""
    return WeekService()


def parse_week(value: Optional[str]) -> bool:
    """Week selector of the visualizer; anything but "false" is the current week."""
    return value != "false"


def parse_day(value: Optional[str], week_service: WeekService) -> int:
    """Day selector of the visualizer; unknown values fall back to today."""
    if value in {"0", "1", "2", "3", "4", "5"}:
        return int(value)
    return week_service.current_date().weekday()


async def submit_shift_form(
    request: Request,
    session: SessionData,
    db: Session,
    week_service: WeekService,
    card_id: Optional[int] = None
) -> JSONResponse:
    """
    Store the shifts of a submitted booking form.

    A form already stored since the last form load is not stored again.

    Args:
        request: FastAPI request carrying the form
        session: Session of the submitting user
        db: Database session
        week_service: Calendar used to resolve days
        card_id: Volunteer to book for, read from the form when omitted

    Returns:
        JSON response with the inserted shifts
    """
    try:
        form = await request.form()
        submission = parse_shift_form(form_items(form), card_id=card_id)
    except ValidationError as e:
        return error_response(e)

    require_card_access(session, submission.card_id)

    if session.form_state.submitted:
        return JSONResponse(content={
            "status": "already_submitted",
            "card_id": submission.card_id,
            "inserted": []
        })

    catalog = get_task_catalog()
    shift_service = ShiftService(db, builder=ShiftSetBuilder(week_service, catalog))

    try:
        inserted = shift_service.submit_shifts(submission)
    except ValidationError as e:
        return error_response(e)
    except StorageError as e:
        logger.error(f"Failed to store shifts: {str(e)}")
        return internal_error_response()

    session.form_state.submitted = True
    session.form_state.rows = 1

    return JSONResponse(content={
        "status": "success",
        "card_id": submission.card_id,
        "inserted": [shift_to_dict(shift, catalog) for shift in inserted]
    })


@router.post("/login")
async def login(
    card_id: int = Form(...),
    surname: str = Form(...),
    db: Session = Depends(get_db)
):
    """
    Process volunteer login.

    Args:
        card_id: Membership card number
        surname: Volunteer surname
        db: Database session

    Returns:
        JSON response with the session cookie set on success
    """
    auth_service = AuthService(db)

    try:
        volunteer = auth_service.authenticate_volunteer(card_id, surname)
    except ValidationError as e:
        logger.warning(f"Failed login for card {card_id}: {e.error_code}")
        return error_response(e)

    response = JSONResponse(content={
        "status": "success",
        "card_id": volunteer.card_id,
        "name": volunteer.name
    })
    create_session(response, SessionData(card_id=volunteer.card_id))
    return response


@router.post("/logout")
async def logout(request: Request):
    """Logout the current user."""
    response = JSONResponse(content={"status": "success"})
    end_session(request, response)
    return response


@router.get("/api/week")
async def get_week(
    session: SessionData = Depends(get_current_session),
    week_service: WeekService = Depends(get_week_service)
):
    """
    Week windows and choices offered by the booking form.

    Returns:
        JSON with both week windows, tasks and hour choices
    """
    catalog = get_task_catalog()
    return JSONResponse(content={
        "title": settings.app_title,
        "current_week": week_service.week_info(True),
        "next_week": week_service.week_info(False),
        "fixed_hours": catalog.fixed_hours,
        "tasks": [task.to_dict() for task in catalog],
        "entrance_hours": entrance_hour_choices(),
        "exit_hours": exit_hour_choices(),
        "fake_day_value": FAKE_DAY_VALUE,
        "fake_task_value": FAKE_TASK_VALUE,
        "max_slots": MAX_SLOTS
    })


@router.get("/api/form-state")
async def get_form_state(
    card_id: int = Query(...),
    session: SessionData = Depends(get_current_session),
    db: Session = Depends(get_db)
):
    """
    Load the booking form for a volunteer.

    Loading the form allows a new submission.
    """
    require_card_access(session, card_id)

    try:
        heading = VolunteerService(db).get_display_name(card_id, is_admin=session.is_admin)
    except ValidationError as e:
        return error_response(e)

    session.form_state.submitted = False

    return JSONResponse(content={
        "card_id": card_id,
        "heading": heading,
        "is_administration": session.is_admin,
        "rows": session.form_state.rows
    })


@router.post("/api/form-state/rows")
async def add_form_row(session: SessionData = Depends(get_current_session)):
    """Show one more shift block in the booking form."""
    session.form_state.rows = min(session.form_state.rows + 1, MAX_SLOTS)
    return JSONResponse(content={"rows": session.form_state.rows})


@router.post("/api/shifts")
async def submit_shifts(
    request: Request,
    session: SessionData = Depends(get_current_session),
    db: Session = Depends(get_db),
    week_service: WeekService = Depends(get_week_service)
):
    """Submit the booking form of the logged-in volunteer."""
    return await submit_shift_form(request, session, db, week_service)


@router.get("/api/shifts")
async def get_own_shifts(
    card_id: Optional[int] = Query(None),
    session: SessionData = Depends(get_current_session),
    db: Session = Depends(get_db)
):
    """
    List the booked shifts of a volunteer.

    Args:
        card_id: Volunteer card number, defaults to the session's own
    """
    card_id = session.card_id if card_id is None else card_id
    require_card_access(session, card_id)

    catalog = get_task_catalog()
    shifts = ShiftService(db).get_volunteer_shifts(card_id)
    return JSONResponse(content=[shift_to_dict(shift, catalog) for shift in shifts])


@router.delete("/api/shifts/{shift_id}")
async def delete_own_shift(
    shift_id: int,
    session: SessionData = Depends(get_current_session),
    db: Session = Depends(get_db)
):
    """Remove one of the logged-in volunteer's shifts."""
    owner = None if session.is_admin else session.card_id

    try:
        ShiftService(db).delete_shift(shift_id, card_id=owner)
    except ValidationError as e:
        return error_response(e)
    except StorageError as e:
        logger.error(f"Failed to delete shift: {str(e)}")
        return internal_error_response()

    return JSONResponse(content={"status": "success", "id": shift_id})


@router.get("/api/roster")
async def get_roster(
    week: Optional[str] = Query(None),
    day: Optional[str] = Query(None),
    session: SessionData = Depends(get_current_session),
    db: Session = Depends(get_db),
    week_service: WeekService = Depends(get_week_service)
):
    """
    Volunteers booked on a day, per task.

    Args:
        week: "true" for the current week, "false" for the next one
        day: Day index 0-5; defaults to today
    """
    is_current_week = parse_week(week)
    day_index = parse_day(day, week_service)
    shift_date = week_service.resolve_day(is_current_week, day_index)

    shift_service = ShiftService(db, builder=ShiftSetBuilder(week_service))
    return JSONResponse(content={
        "is_current_week": is_current_week,
        "day_index": day_index,
        "day": week_service.day_name(shift_date),
        "date": week_service.format_date(shift_date),
        "weeks": [
            week_service.week_info(True),
            week_service.week_info(False)
        ],
        "roster": shift_service.get_roster(shift_date)
    })


@router.get("/api/events")
async def shift_events(
    request: Request,
    session: SessionData = Depends(get_current_session)
):
    """Server-sent events telling viewers to refresh shift data."""
    return StreamingResponse(
        notifier.events(request.is_disconnected),
        media_type="text/event-stream"
    )
