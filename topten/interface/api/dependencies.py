"""Request helpers shared by routes."""

from fastapi import Request

from topten.adapter.session import Session, SessionManager
from topten.domain.error import UnauthenticatedError


def load_session(request: Request, session_manager: SessionManager) -> Session:
    """Session for the incoming request (anonymous if no valid cookie)."""
    return session_manager.get_session(request.cookies)


def require_user_id(session: Session, message: str = "Not authenticated") -> str:
    """User id of a logged-in session.

    Raises:
        UnauthenticatedError: If the session is anonymous
    """
    if not session.user_id:
        raise UnauthenticatedError(message)
    return session.user_id
