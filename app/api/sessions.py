"""Server-side sessions for volunteers and administrators."""
from dataclasses import dataclass, field
from fastapi import HTTPException, Request, Response
from typing import Dict, Optional
import secrets

from app.config import settings


SESSION_COOKIE = "session_id"


@dataclass
class ShiftFormState:
    """
    Per-session state of the booking form.

    ``rows`` is how many shift blocks the form currently shows; ``submitted``
    is set once a form has been stored and cleared on the next form load, so
    a resubmitted page does not insert again.
    """

    rows: int = 1
    submitted: bool = False


@dataclass
class SessionData:
    """Identity and form state of a logged-in user."""

    card_id: int
    is_admin: bool = False
    form_state: ShiftFormState = field(default_factory=ShiftFormState)


# Session storage (in-memory, keyed by session cookie)
sessions: Dict[str, SessionData] = {}


def get_session_id(request: Request) -> Optional[str]:
    """
    Get session ID from cookie.

    Args:
        request: FastAPI request object

    Returns:
        Session ID if exists, None otherwise
    """
    return request.cookies.get(SESSION_COOKIE)


def create_session(response: Response, data: SessionData) -> str:
    """
    Store a new session and set its cookie on the response.

    Args:
        response: Response carrying the cookie
        data: Session data to store

    Returns:
        The new session ID
    """
    session_id = secrets.token_urlsafe(32)
    sessions[session_id] = data
    response.set_cookie(
        key=SESSION_COOKIE,
        value=session_id,
        httponly=settings.session_cookie_httponly,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        max_age=settings.session_max_age
    )
    return session_id


def end_session(request: Request, response: Response) -> None:
    """Forget the current session and clear its cookie."""
    session_id = get_session_id(request)
    if session_id and session_id in sessions:
        del sessions[session_id]
    response.delete_cookie(SESSION_COOKIE)


def get_current_session(request: Request) -> SessionData:
    """
    Get the session of the authenticated user.

    Raises:
        HTTPException: If not authenticated
    """
    session_id = get_session_id(request)
    if not session_id or session_id not in sessions:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return sessions[session_id]


def get_current_admin(request: Request) -> SessionData:
    """
    Get the session of the authenticated administrator.

    Raises:
        HTTPException: If not authenticated as administrator
    """
    session = get_current_session(request)
    if not session.is_admin:
        raise HTTPException(status_code=401, detail="Not authenticated as administrator")
    return session


def require_card_access(session: SessionData, card_id: int) -> None:
    """
    Ensure the session may act on a volunteer's shifts.

    Administrators may act on anyone; volunteers only on themselves.

    Raises:
        HTTPException: If the card number is not the session's own
    """
    if not session.is_admin and session.card_id != card_id:
        raise HTTPException(status_code=403, detail="Card number does not match the session")
