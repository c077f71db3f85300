"""Admin web interface routes."""
from fastapi import APIRouter, Body, Depends, Form, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Optional
import logging

from app.api.responses import (
    error_response,
    internal_error_response,
    shift_to_dict,
    volunteer_to_dict,
)
from app.api.sessions import (
    SessionData,
    create_session,
    end_session,
    get_current_admin,
)
from app.api.volunteer import get_week_service, submit_shift_form
from app.database import get_db
from app.exceptions import StorageError, ValidationError
from app.models.task import get_task_catalog
from app.services.auth_service import AuthService
from app.services.shift_builder import ShiftSetBuilder
from app.services.shift_service import ShiftService
from app.services.volunteer_service import VolunteerService
from app.services.week_service import WeekService


logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login")
async def login(
    card_id: int = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db)
):
    """
    Process administrator login.

    Args:
        card_id: Card number of the administrator
        password: Shared administration password
        db: Database session

    Returns:
        JSON response with the session cookie set on success
    """
    auth_service = AuthService(db)

    try:
        volunteer = auth_service.authenticate_admin(card_id, password)
    except ValidationError as e:
        return error_response(e)

    response = JSONResponse(content={
        "status": "success",
        "card_id": volunteer.card_id
    })
    create_session(response, SessionData(card_id=volunteer.card_id, is_admin=True))
    return response


@router.post("/logout")
async def logout(request: Request):
    """Logout administrator."""
    response = JSONResponse(content={"status": "success"})
    end_session(request, response)
    return response


@router.get("/api/volunteers")
async def get_volunteers(
    admin: SessionData = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """
    Get all volunteers ordered by card number.

    Returns:
        JSON list of volunteers
    """
    volunteers = VolunteerService(db).list_volunteers()
    return JSONResponse(content=[volunteer_to_dict(volunteer) for volunteer in volunteers])


@router.post("/api/volunteers")
async def create_volunteer(
    card_id: int = Form(...),
    surname: str = Form(...),
    name: str = Form(...),
    fiscal_code: str = Form(""),
    disabled: bool = Form(False),
    admin: SessionData = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """
    Register a new volunteer.

    Returns:
        JSON response with the created volunteer
    """
    try:
        volunteer = VolunteerService(db).create_volunteer(
            card_id, surname, name, fiscal_code=fiscal_code, disabled=disabled
        )
    except ValidationError as e:
        return error_response(e)

    return JSONResponse(content={
        "status": "success",
        "volunteer": volunteer_to_dict(volunteer)
    })


@router.put("/api/volunteers/{card_id}")
async def update_volunteer(
    card_id: int,
    surname: Optional[str] = Body(None),
    name: Optional[str] = Body(None),
    fiscal_code: Optional[str] = Body(None),
    disabled: Optional[bool] = Body(None),
    admin: SessionData = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """
    Update a volunteer's record.

    Only the fields present in the body are changed.
    """
    try:
        volunteer = VolunteerService(db).update_volunteer(
            card_id,
            surname=surname,
            name=name,
            fiscal_code=fiscal_code,
            disabled=disabled
        )
    except ValidationError as e:
        return error_response(e)
    except ValueError as e:
        return JSONResponse(
            status_code=400,
            content={"status": "error", "message": str(e)}
        )

    return JSONResponse(content={
        "status": "success",
        "volunteer": volunteer_to_dict(volunteer)
    })


@router.delete("/api/volunteers/{card_id}")
async def delete_volunteer(
    card_id: int,
    admin: SessionData = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Delete a volunteer and their shifts."""
    if card_id == admin.card_id:
        return JSONResponse(
            status_code=400,
            content={
                "status": "error",
                "message": "Non puoi cancellare te stesso"
            }
        )

    try:
        VolunteerService(db).delete_volunteer(card_id)
    except ValidationError as e:
        return error_response(e)

    return JSONResponse(content={"status": "success"})


@router.get("/api/shifts")
async def get_shifts(
    admin: SessionData = Depends(get_current_admin),
    db: Session = Depends(get_db),
    week_service: WeekService = Depends(get_week_service)
):
    """
    Every volunteer with their booked shifts.

    Past shifts are purged before listing.

    Returns:
        JSON list of volunteers with shifts; disabled volunteers carry a
        message instead of shifts
    """
    catalog = get_task_catalog()
    shift_service = ShiftService(db, builder=ShiftSetBuilder(week_service, catalog))

    try:
        shift_service.purge_past_shifts()
    except StorageError as e:
        logger.error(f"Failed to purge past shifts: {str(e)}")
        return internal_error_response()

    result = []
    for entry in shift_service.get_all_volunteer_shifts():
        volunteer = entry["volunteer"]
        shifts = entry["shifts"]
        result.append({
            "volunteer": volunteer_to_dict(volunteer),
            "message": f"({volunteer.card_id}) {volunteer.name} {volunteer.surname}",
            "disabled_message": "Il volontario è disabilitato!" if volunteer.disabled else None,
            "shifts": None if shifts is None else [shift_to_dict(shift, catalog) for shift in shifts]
        })

    return JSONResponse(content=result)


@router.post("/api/volunteers/{card_id}/shifts")
async def submit_volunteer_shifts(
    card_id: int,
    request: Request,
    admin: SessionData = Depends(get_current_admin),
    db: Session = Depends(get_db),
    week_service: WeekService = Depends(get_week_service)
):
    """Submit a booking form on behalf of a volunteer."""
    return await submit_shift_form(request, admin, db, week_service, card_id=card_id)


@router.delete("/api/shifts/{shift_id}")
async def delete_shift(
    shift_id: int,
    admin: SessionData = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Remove any volunteer's shift."""
    try:
        ShiftService(db).delete_shift(shift_id)
    except ValidationError as e:
        return error_response(e)
    except StorageError as e:
        logger.error(f"Failed to delete shift: {str(e)}")
        return internal_error_response()

    return JSONResponse(content={"status": "success", "id": shift_id})
