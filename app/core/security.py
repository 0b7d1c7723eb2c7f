"""Caller identity from bearer tokens (JWT, python-jose)."""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from app.core.config import get_settings

logger = logging.getLogger(__name__)


def create_access_token(subject: str, expires_minutes: int | None = None) -> str:
    """Issue a signed token whose ``sub`` is the caller identity (dev tooling and tests)."""
    settings = get_settings()
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    claims: dict = {
        "sub": subject,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    if settings.jwt_audience:
        claims["aud"] = settings.jwt_audience
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str | None:
    """Return the caller identity from a token, or None if it is invalid, expired or has no subject."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={"verify_aud": settings.jwt_audience is not None},
        )
    except JWTError as exc:
        logger.info("Rejected bearer token: %s", exc)
        return None
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        return None
    return subject
