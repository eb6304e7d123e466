"""Session token domain service."""

from uuid import UUID

import logfire

from whistle.config import AuthSettings
from whistle.domain.value import UserId
from whistle.util.jwt import (
    SessionClaims,
    TokenError,
    TokenExpired,
    decode_token,
    issue_token,
)

from .base import Service


class JWTService(Service):
    """Turns session cookies into user identities."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, handle: str | None = None) -> str:
        """Sign a session token for a user."""
        return issue_token(user_id, self.auth_settings, handle=handle)

    def read_claims(self, token: str) -> SessionClaims:
        """Verify a session token and return its claims.

        Raises:
            TokenError: If the token is expired, forged or malformed
        """
        with logfire.span("jwt_service.read_claims"):
            try:
                return decode_token(token, self.auth_settings)
            except TokenExpired:
                logfire.info("Expired session token")
                raise
            except TokenError as e:
                logfire.warn("Rejected session token", error=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> UserId | None:
        """Resolve the user behind a session cookie, None when anonymous.

        Reads accept anonymous viewers, so a missing, invalid or expired
        token is not an error here. Mutations reject a None user later.

        Args:
            token: Value of the session cookie, if any

        Returns:
            User ID if the token is valid, None otherwise
        """
        if not token:
            return None

        try:
            return UserId(UUID(self.read_claims(token).user_id))
        except TokenError:
            return None
        except ValueError:
            logfire.warn("Session token carries a malformed user ID")
            return None
