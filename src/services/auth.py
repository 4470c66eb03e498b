"""Bearer token handling for identity provider JWTs."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from src.config import get_settings

settings = get_settings()


def create_access_token(user_id: str, email: str | None = None) -> str:
    """Create a JWT access token for a user id (development and tests)."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {"sub": user_id, "exp": expire}
    if email:
        to_encode["email"] = email
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def get_user_id(token: str) -> str | None:
    """Return the stable user id (``sub`` claim) of a valid token."""
    payload = decode_access_token(token)
    if payload is None:
        return None
    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id.strip():
        return None
    return user_id
