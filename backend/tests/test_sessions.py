"""Tests for the server-side session store."""

from datetime import datetime, timedelta, timezone

from jose import jwt

from expense_tracker.db import models
from expense_tracker.services.sessions import SessionStore

USER = {"id": 1, "username": "alice@example.com", "password": "$pbkdf2-sha256$..."}


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def test_issue_then_load_returns_user_unchanged(db_session):
    store = SessionStore("secret")
    token = store.issue(db_session, USER)
    assert store.load(db_session, token) == USER


def test_default_lifetime_is_seven_days(db_session):
    store = SessionStore("secret")
    assert store.max_age_seconds == 7 * 24 * 60 * 60
    store.issue(db_session, USER)
    record = db_session.query(models.SessionRecord).one()
    remaining = record.expires_at - utcnow()
    assert timedelta(days=6, hours=23) < remaining <= timedelta(days=7)


def test_each_issue_gets_its_own_session(db_session):
    store = SessionStore("secret")
    assert store.issue(db_session, USER) != store.issue(db_session, USER)
    assert db_session.query(models.SessionRecord).count() == 2


def test_rejects_missing_and_garbage_tokens(db_session):
    store = SessionStore("secret")
    assert store.load(db_session, None) is None
    assert store.load(db_session, "") is None
    assert store.load(db_session, "not-a-token") is None


def test_rejects_token_signed_with_other_secret(db_session):
    token = SessionStore("other").issue(db_session, USER)
    assert SessionStore("secret").load(db_session, token) is None


def test_expired_record_is_not_loaded_and_is_removed(db_session):
    store = SessionStore("secret")
    token = store.issue(db_session, USER)
    record = db_session.query(models.SessionRecord).one()
    record.expires_at = utcnow() - timedelta(seconds=1)
    db_session.commit()
    assert store.load(db_session, token) is None
    assert db_session.query(models.SessionRecord).count() == 0


def test_purge_expired(db_session):
    store = SessionStore("secret")
    live = store.issue(db_session, USER)
    store.issue(db_session, USER)
    live_sid = jwt.get_unverified_claims(live)["sub"]
    stale = db_session.query(models.SessionRecord).filter(models.SessionRecord.sid != live_sid).one()
    stale.expires_at = utcnow() - timedelta(days=1)
    db_session.commit()

    assert store.purge_expired(db_session) == 1
    assert db_session.query(models.SessionRecord).count() == 1
    assert store.load(db_session, live) == USER
