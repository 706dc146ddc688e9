# expense_tracker/services/credentials.py
from typing import Optional
from sqlalchemy.orm import Session

from expense_tracker.db import models


def find_user_by_username(db: Session, username: str) -> Optional[models.User]:
    # exact, case-sensitive match on the stored value
    return db.query(models.User).filter(models.User.username == username).first()


def create_user(db: Session, username: str, password: str) -> models.User:
    """
    Insert a user row. `password` is either a hash or the OAuth sentinel.
    Raises sqlalchemy.exc.IntegrityError if the username is already taken.
    """
    user = models.User(username=username, password=password)
    db.add(user)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    return user
