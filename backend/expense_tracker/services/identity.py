# expense_tracker/services/identity.py
"""Turns local credentials or an OAuth profile into a user record.

Every entry point either returns a `models.User` or raises `AuthError`;
callers never learn whether the username or the password was wrong.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from expense_tracker.db import models
from expense_tracker.services import credentials
from expense_tracker.services.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Authentication rejected."""


def verify_credentials(record: Optional[models.User], password: str) -> models.User:
    if record is None:
        raise AuthError("user not found")
    if not verify_password(password, record.password):
        raise AuthError("invalid password")
    return record


def authenticate_local(db: Session, username: str, password: str) -> models.User:
    user = credentials.find_user_by_username(db, username)
    return verify_credentials(user, password)


def register_local(db: Session, username: str, password: str) -> Optional[models.User]:
    """
    Create a locally authenticated user.
    Returns None when the username is already registered.
    """
    if credentials.find_user_by_username(db, username) is not None:
        return None
    hashed = hash_password(password)
    try:
        return credentials.create_user(db, username, hashed)
    except IntegrityError:
        # lost a race against a concurrent registration of the same name
        logger.info("Username %s registered concurrently", username)
        return None


def resolve_oauth_user(db: Session, email: str) -> models.User:
    """
    Find or create the user for a provider-asserted email.

    An existing account is returned as-is, whatever its stored password:
    the provider's assertion is trusted in place of a local check.
    """
    if not email:
        raise AuthError("provider did not supply an email")
    user = credentials.find_user_by_username(db, email)
    if user is not None:
        return user
    try:
        return credentials.create_user(db, email, models.OAUTH_PASSWORD_SENTINEL)
    except IntegrityError:
        user = credentials.find_user_by_username(db, email)
        if user is None:
            raise
        return user
