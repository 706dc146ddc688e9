# expense_tracker/services/sessions.py
"""Server-side session store.

The cookie carries a python-jose HS256 token; its `sub` is the id of a row in
`sessions` holding the serialized user, and its `exp` is the fixed expiry of
that row. Sessions are not renewed on use.
"""
import json
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from expense_tracker.db import models

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def _utcnow() -> datetime:
    # naive UTC, matching the DateTime column
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


class SessionStore:
    def __init__(self, secret_key: str, max_age: timedelta = timedelta(days=7)):
        self.secret_key = secret_key
        self.max_age = max_age

    @property
    def max_age_seconds(self) -> int:
        return int(self.max_age.total_seconds())

    def issue(self, db: Session, user: Dict[str, Any]) -> str:
        """Persist a new session for `user` and return the cookie value."""
        now = _utcnow()
        expire = now + self.max_age
        sid = secrets.token_urlsafe(32)
        db.add(models.SessionRecord(sid=sid, data=json.dumps(user), expires_at=expire))
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        payload = {
            "sub": sid,
            "iat": int(now.replace(tzinfo=timezone.utc).timestamp()),
            "exp": int(expire.replace(tzinfo=timezone.utc).timestamp()),
        }
        return jwt.encode(payload, self.secret_key, algorithm=ALGORITHM)

    def load(self, db: Session, token: Optional[str]) -> Optional[Dict[str, Any]]:
        """Return the stored user for a cookie value, or None."""
        if not token:
            return None
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[ALGORITHM])
        except JWTError:
            logger.debug("Rejected session cookie")
            return None
        sid = payload.get("sub")
        if not sid:
            return None
        record = db.get(models.SessionRecord, sid)
        if record is None:
            return None
        if record.expires_at <= _utcnow():
            db.delete(record)
            db.commit()
            return None
        return json.loads(record.data)

    def purge_expired(self, db: Session) -> int:
        removed = (
            db.query(models.SessionRecord)
            .filter(models.SessionRecord.expires_at <= _utcnow())
            .delete(synchronize_session=False)
        )
        db.commit()
        if removed:
            logger.info("Purged %d expired sessions", removed)
        return removed
