# expense_tracker/services/security.py
"""Password hashing helpers.

We use passlib pbkdf2_sha256 (pure-python, salted, deliberately slow) with a
fixed work factor so every stored hash costs the same to check.
"""
import logging
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

PASSWORD_HASH_ROUNDS = 29000

pwd_ctx = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__default_rounds=PASSWORD_HASH_ROUNDS,
)


def hash_password(password: str) -> str:
    """Hash a plaintext password (never store plaintext)."""
    if password is None:
        raise ValueError("password cannot be None")
    return pwd_ctx.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify plain password against hashed.
    A hash that cannot be checked (e.g. the OAuth sentinel) is logged and
    treated as a mismatch.
    """
    if plain is None or hashed is None:
        return False
    try:
        return pwd_ctx.verify(plain, hashed)
    except (ValueError, TypeError) as exc:
        logger.warning("Error comparing password: %s", exc)
        return False
