"""Password hashing, session tokens and signed flash payloads."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from poseidon.core.config import Settings, settings as default_settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Flash messages only need to survive one redirect.
FLASH_EXPIRE_SECONDS = 60


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_session_token(
    username: str, roles: list[str], settings: Settings | None = None
) -> str:
    """Create a signed session token with sub (username), roles, and exp."""
    settings = settings or default_settings
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": username,
        "roles": roles,
        "exp": expire,
        "iat": now,
    }
    return jwt.encode(
        payload,
        settings.SESSION_SECRET.get_secret_value(),
        algorithm=settings.SESSION_ALGORITHM,
    )


def decode_session_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """
    Decode and validate a session token; return payload (sub, roles, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    settings = settings or default_settings
    return jwt.decode(
        token,
        settings.SESSION_SECRET.get_secret_value(),
        algorithms=[settings.SESSION_ALGORITHM],
    )


def encode_flash(kind: str, message: str, settings: Settings | None = None) -> str:
    """Sign a one-shot flash message so the browser cannot forge it."""
    settings = settings or default_settings
    payload = {
        "kind": kind,
        "msg": message,
        "exp": datetime.now(UTC) + timedelta(seconds=FLASH_EXPIRE_SECONDS),
    }
    return jwt.encode(
        payload,
        settings.SESSION_SECRET.get_secret_value(),
        algorithm=settings.SESSION_ALGORITHM,
    )


def decode_flash(token: str, settings: Settings | None = None) -> tuple[str, str] | None:
    """Return (kind, message) from a flash cookie, or None if it is invalid or expired."""
    settings = settings or default_settings
    try:
        payload = jwt.decode(
            token,
            settings.SESSION_SECRET.get_secret_value(),
            algorithms=[settings.SESSION_ALGORITHM],
        )
    except jwt.PyJWTError:
        return None
    kind = payload.get("kind")
    message = payload.get("msg")
    if not isinstance(kind, str) or not isinstance(message, str):
        return None
    return kind, message
