"""
Shared fixtures: a throwaway SQLite database, a fake Google client and an
app wired to both.
"""

import pytest
from fastapi.testclient import TestClient

from expense_tracker.core.config import SimpleSettings
from expense_tracker.db.session import Database
from expense_tracker.main import create_app
from expense_tracker.services.oauth import OAuthError


class FakeOAuthClient:
    """Stands in for GoogleOAuthClient; maps codes to profiles."""

    def __init__(self):
        self.profiles = {}

    def authorization_url(self, state):
        return f"https://accounts.example.test/auth?state={state}"

    def fetch_profile(self, code):
        if code not in self.profiles:
            raise OAuthError("unknown code")
        return self.profiles[code]


@pytest.fixture
def settings(tmp_path):
    s = SimpleSettings()
    s.DATABASE_URL = f"sqlite:///{tmp_path / 'test.db'}"
    s.SESSION_SECRET = "test-secret"
    s.SESSION_COOKIE_NAME = "session"
    s.SESSION_MAX_AGE_DAYS = 7
    s.SESSION_COOKIE_SECURE = False
    s.SESSION_COOKIE_HTTPONLY = True
    s.AUTO_CREATE_TABLES = True
    s.LOG_LEVEL = "INFO"
    return s


@pytest.fixture
def database(settings):
    db = Database(settings.DATABASE_URL)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def oauth_client():
    return FakeOAuthClient()


@pytest.fixture
def app(settings, database, oauth_client):
    return create_app(settings=settings, database=database, oauth_client=oauth_client)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def anon_client(app):
    """A second client sharing the app but not its cookies."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register():
    def _register(client, username="alice@example.com", password="s3cret"):
        return client.post(
            "/register",
            data={"username": username, "password": password},
            follow_redirects=False,
        )
    return _register
