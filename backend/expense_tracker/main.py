# expense_tracker/main.py
import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from expense_tracker.api import auth, health, transactions
from expense_tracker.api.deps import LoginRequired, redirect
from expense_tracker.core.config import settings as default_settings
from expense_tracker.db.session import Database
from expense_tracker.services.oauth import GoogleOAuthClient
from expense_tracker.services.sessions import SessionStore

logger = logging.getLogger(__name__)


async def login_required_handler(request: Request, exc: LoginRequired):
    return redirect("/login")


async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse("Internal Server Error", status_code=500)


def create_app(settings=None, database=None, session_store=None, oauth_client=None) -> FastAPI:
    """
    Build the application. Collaborators not passed in are constructed from
    `settings`; the app disposes the database on shutdown.
    """
    settings = settings or default_settings

    database = database or Database(settings.DATABASE_URL)
    session_store = session_store or SessionStore(
        settings.SESSION_SECRET, max_age=timedelta(days=settings.SESSION_MAX_AGE_DAYS)
    )
    oauth_client = oauth_client or GoogleOAuthClient(
        settings.GOOGLE_CLIENT_ID,
        settings.GOOGLE_CLIENT_SECRET,
        settings.GOOGLE_CALLBACK_URL,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.AUTO_CREATE_TABLES:
            database.create_all()
        db = database.session()
        try:
            session_store.purge_expired(db)
        finally:
            db.close()
        logger.info("Expense tracker ready (database %s)", database.engine.url.render_as_string(hide_password=True))
        yield
        database.dispose()

    app = FastAPI(title="Expense Tracker", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.session_store = session_store
    app.state.oauth_client = oauth_client

    app.add_exception_handler(LoginRequired, login_required_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(transactions.router)
    return app

