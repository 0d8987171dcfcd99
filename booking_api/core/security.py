import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request
from jose import JWTError, jwt

from booking_api.core.config import Settings
from booking_api.core.errors import Unauthorized
from booking_api.core.logger import logger

ADMIN_ROLE = "admin"


def create_admin_token(settings: Settings, issued_at: Optional[datetime] = None) -> str:
    """Signed admin token carrying a fixed role claim and a TOKEN_TTL_DAYS expiry."""
    issued_at = issued_at or datetime.now(timezone.utc)
    claims = {
        "role": ADMIN_ROLE,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + timedelta(days=settings.TOKEN_TTL_DAYS)).timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str, settings: Settings) -> dict:
    """Decode a token, raising Unauthorized when the signature or expiry is bad."""
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.info(f"🔒 Token rejected: {e}")
        raise Unauthorized("invalid_token", "Invalid token")


def login(password: Optional[str], settings: Settings) -> str:
    expected = settings.ADMIN_PASSWORD
    # An unset admin password disables login entirely
    if not expected or password is None or not secrets.compare_digest(
        str(password).encode("utf-8"), expected.encode("utf-8")
    ):
        logger.warning("🔒 Admin login failed: wrong password")
        raise Unauthorized("wrong_password", "Wrong password")

    logger.info("🔓 Admin login succeeded")
    return create_admin_token(settings)


def token_from_request(request: Request, settings: Settings) -> Optional[str]:
    header = request.headers.get("Authorization") or ""
    if header.startswith("Bearer "):
        return header[len("Bearer "):].strip() or None
    return request.cookies.get(settings.AUTH_COOKIE_NAME) or None


async def require_admin(request: Request) -> dict:
    """
    FastAPI dependency guarding admin routes.
    Accepts a bearer token or the auth cookie; any validly signed,
    unexpired token grants full admin access.
    """
    settings: Settings = request.app.state.settings
    token = token_from_request(request, settings)
    if not token:
        raise Unauthorized("unauthorized", "Unauthorized")
    return verify_token(token, settings)
