"""Cookie-session login/logout and auth dependencies (get_session, require_admin, ...)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from brainfeed.core.database import get_db
from brainfeed.core.security import verify_password
from brainfeed.core.session import SessionManager
from brainfeed.models.user import User
from brainfeed.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SessionData,
    UserOut,
)
from brainfeed.services.authorization import Capability, ensure_authorized

logger = logging.getLogger(__name__)

router = APIRouter()


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def get_session(
    request: Request,
    manager: Annotated[SessionManager, Depends(get_session_manager)],
) -> SessionData | None:
    """Dependency: decoded session from the cookie, or None. Bad or expired tokens count as no session."""
    return manager.parse(request.cookies.get(manager.cookie_name))


def require_authenticated(
    session: Annotated[SessionData | None, Depends(get_session)],
) -> SessionData:
    """Dependency: any valid session. Raises 401 otherwise."""
    return ensure_authorized(session, Capability.AUTHENTICATED)


def require_writer_or_admin(
    session: Annotated[SessionData | None, Depends(get_session)],
) -> SessionData:
    """Dependency: role 'writer' or 'admin'. 401 without a session, 403 for other roles."""
    return ensure_authorized(session, Capability.WRITER_OR_ADMIN)


def require_admin(
    session: Annotated[SessionData | None, Depends(get_session)],
) -> SessionData:
    """Dependency: role 'admin'. 401 without a session, 403 for non-admin."""
    return ensure_authorized(session, Capability.ADMIN)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    manager: Annotated[SessionManager, Depends(get_session_manager)],
) -> LoginResponse:
    """
    Authenticate with username and password.

    On success the signed session token is set as an HttpOnly cookie and the
    user's public profile is returned.
    """
    user = db.execute(
        select(User).where(User.username == body.username)
    ).scalar_one_or_none()
    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("Login failed", extra={"username": body.username})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    token = manager.create(
        SessionData(user_id=user.id, username=user.username, role=user.role)
    )
    manager.set_cookie(response, token)
    return LoginResponse(user=UserOut.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    manager: Annotated[SessionManager, Depends(get_session_manager)],
) -> MessageResponse:
    """Discard the session cookie. There is no server-side session to clear."""
    manager.destroy(response)
    return MessageResponse(message="Logout successful")


@router.get("/me", response_model=UserOut)
def me(
    session: Annotated[SessionData, Depends(require_authenticated)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    """Profile of the signed-in user. 401 when the session's user no longer exists."""
    user = db.get(User, session.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return UserOut.model_validate(user)
