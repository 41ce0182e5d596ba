"""
Password hashing.

bcrypt salts every hash and embeds the cost factor in it, so a hash made with
one BCRYPT_ROUNDS value still verifies after the setting changes.
"""
import bcrypt

from app.core.config import settings
from app.core.errors import ValidationFailed

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


def hash_password(raw_password: str, rounds: int = None) -> str:
    """Return a salted bcrypt hash of raw_password as text"""
    if len(raw_password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationFailed(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(raw_password.encode("utf-8"), salt).decode("utf-8")


def verify_password(raw_password: str, password_hash: str) -> bool:
    """Constant-time check of raw_password against a stored bcrypt hash"""
    try:
        return bcrypt.checkpw(raw_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


# Checked against when the username is unknown so both login failures cost the same
DUMMY_PASSWORD_HASH = hash_password("not-a-real-password")
