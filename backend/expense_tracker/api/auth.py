# expense_tracker/api/auth.py
import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from expense_tracker.api.deps import (
    get_db_dep,
    get_oauth_client,
    get_session_store,
    get_settings,
    redirect,
)
from expense_tracker.db import models
from expense_tracker.schemas.transaction import Totals
from expense_tracker.services import identity
from expense_tracker.services.oauth import GoogleOAuthClient, OAuthError
from expense_tracker.services.sessions import SessionStore

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])

OAUTH_STATE_COOKIE = "oauth_state"
OAUTH_STATE_MAX_AGE = 600


async def _start_session(request: Request, db: Session, store: SessionStore, user: models.User):
    """Issue a fresh session for `user` and send them to the dashboard."""
    token = await run_in_threadpool(store.issue, db, user.to_dict())
    settings = get_settings(request)
    response = redirect("/")
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=store.max_age_seconds,
        httponly=settings.SESSION_COOKIE_HTTPONLY,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.get("/login", response_model=Totals)
def login_form():
    return Totals()


@router.get("/register", response_model=Totals)
def register_form():
    return Totals()


@router.post("/login")
async def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db_dep),
    store: SessionStore = Depends(get_session_store),
):
    try:
        user = await run_in_threadpool(identity.authenticate_local, db, username, password)
    except identity.AuthError as exc:
        logger.warning("Login rejected for %r: %s", username, exc)
        return redirect("/login")
    logger.info("User %s logged in", user.id)
    return await _start_session(request, db, store, user)


@router.post("/register")
async def register(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db_dep),
    store: SessionStore = Depends(get_session_store),
):
    try:
        user = await run_in_threadpool(identity.register_local, db, username, password)
    except SQLAlchemyError:
        logger.exception("Registration failed for %r", username)
        return PlainTextResponse("Internal Server Error", status_code=500)
    if user is None:
        return redirect("/login")
    logger.info("Registered user %s", user.id)
    return await _start_session(request, db, store, user)


@router.get("/auth/google")
def google_login(request: Request, oauth: GoogleOAuthClient = Depends(get_oauth_client)):
    state = secrets.token_urlsafe(16)
    response = redirect(oauth.authorization_url(state))
    response.set_cookie(
        OAUTH_STATE_COOKIE,
        state,
        max_age=OAUTH_STATE_MAX_AGE,
        httponly=True,
        secure=get_settings(request).SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.get("/auth/google/transactions")
async def google_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    db: Session = Depends(get_db_dep),
    store: SessionStore = Depends(get_session_store),
    oauth: GoogleOAuthClient = Depends(get_oauth_client),
):
    expected_state = request.cookies.get(OAUTH_STATE_COOKIE)
    try:
        if error:
            raise OAuthError(f"provider returned error {error!r}")
        if not code:
            raise OAuthError("callback without code")
        if not expected_state or not state or not secrets.compare_digest(state, expected_state):
            raise OAuthError("state mismatch")
        profile = await run_in_threadpool(oauth.fetch_profile, code)
        user = await run_in_threadpool(identity.resolve_oauth_user, db, profile.get("email"))
    except (OAuthError, identity.AuthError) as exc:
        logger.warning("Google sign-in failed: %s", exc)
        response = redirect("/login")
    else:
        logger.info("User %s logged in with Google", user.id)
        response = await _start_session(request, db, store, user)
    response.delete_cookie(OAUTH_STATE_COOKIE)
    return response
