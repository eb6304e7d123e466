"""Session token encoding.

Tokens are issued by the platform's auth service and carried in the
``auth_token`` cookie. This backend only needs the user ID out of them;
``issue_token`` exists for tooling and tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel

from whistle.config import AuthSettings

REQUIRED_CLAIMS = ["user_id", "exp"]


class SessionClaims(BaseModel):
    """Claims read from a session token."""

    user_id: str
    exp: int
    handle: Optional[str] = None


class TokenError(Exception):
    """Session token could not be used."""


class TokenExpired(TokenError):
    pass


def issue_token(
    user_id: str, settings: AuthSettings, handle: Optional[str] = None
) -> str:
    """Sign a session token valid for ``settings.jwt_expiry_days``."""
    claims: dict = {
        "user_id": user_id,
        "exp": datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days),
    }
    if handle:
        claims["handle"] = handle
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: AuthSettings) -> SessionClaims:
    """Check the signature and expiry of a session token.

    Raises:
        TokenExpired: If the token is past its expiry (beyond the leeway)
        TokenError: If the token is malformed, forged or missing claims
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            leeway=settings.jwt_leeway_seconds,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpired("Session token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid session token: {e}") from e
    return SessionClaims.model_validate(claims)
