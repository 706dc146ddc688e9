# expense_tracker/api/deps.py
from typing import Generator, Optional

from fastapi import Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from expense_tracker.schemas.auth import SessionUser
from expense_tracker.services.oauth import GoogleOAuthClient
from expense_tracker.services.sessions import SessionStore


class LoginRequired(Exception):
    """Raised by the session gate; answered with a redirect to /login."""


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


def get_settings(request: Request):
    return request.app.state.settings


def get_db_dep(request: Request) -> Generator[Session, None, None]:
    yield from request.app.state.database.get_db()


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_oauth_client(request: Request) -> GoogleOAuthClient:
    return request.app.state.oauth_client


def get_session_user(
    request: Request,
    db: Session = Depends(get_db_dep),
    store: SessionStore = Depends(get_session_store),
) -> Optional[SessionUser]:
    token = request.cookies.get(request.app.state.settings.SESSION_COOKIE_NAME)
    data = store.load(db, token)
    if data is None:
        return None
    return SessionUser(**data)


def get_current_user(user: Optional[SessionUser] = Depends(get_session_user)) -> SessionUser:
    if user is None:
        raise LoginRequired()
    return user
