"""
JWT token handler.

Issues the access tokens returned by parent login and decodes them again for
consumers of the API.
"""

import os
import time
import logging
from datetime import timedelta
from typing import Optional
from dataclasses import dataclass, asdict

from jose import jwt, JWTError

from ..errors import TokenIssueError

logger = logging.getLogger(__name__)

# Token configuration
DEFAULT_SECRET_KEY = "parent-auth-secret-key-change-in-production"
ALGORITHM = "HS256"


@dataclass
class TokenPayload:
    """JWT token payload."""
    uuid: str  # Parent account the token is bound to
    token_type: str
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "TokenPayload":
        return cls(
            uuid=data["uuid"],
            token_type=data["token_type"],
            exp=int(data["exp"]),
            iat=int(data["iat"])
        )


class JWTHandler:
    """Generates and validates JWT tokens bound to a parent uuid."""

    def __init__(self, secret_key: Optional[str] = None):
        """
        Initialize JWT handler.

        Args:
            secret_key: Secret key for signing tokens.
                       Falls back to JWT_SECRET_KEY env var or default.
        """
        self.secret_key = (
            secret_key
            or os.getenv("JWT_SECRET_KEY")
            or DEFAULT_SECRET_KEY
        )

        if self.secret_key == DEFAULT_SECRET_KEY:
            logger.warning(
                "Using default JWT secret key. "
                "Set JWT_SECRET_KEY environment variable in production!"
            )

    def generate_uuid_jwt(self, uuid: str, token_type: str, expires_in: timedelta) -> str:
        """
        Create a token bound to a parent uuid.

        Args:
            uuid: Parent account identifier
            token_type: Kind of token, e.g. "access_token"
            expires_in: Validity duration

        Returns:
            Encoded JWT token string

        Raises:
            TokenIssueError: If the token can't be encoded
        """
        if not uuid:
            raise TokenIssueError("uuid is required to issue a token")

        now = int(time.time())
        exp = now + int(expires_in.total_seconds())

        payload = TokenPayload(uuid=uuid, token_type=token_type, exp=exp, iat=now)

        try:
            token = jwt.encode(payload.to_dict(), self.secret_key, algorithm=ALGORITHM)
        except JWTError as e:
            raise TokenIssueError(f"failed to encode {token_type}: {e}") from e

        logger.debug(f"Created {token_type} for {uuid}, expires in {exp - now}s")
        return token

    def verify_token(self, token: str) -> Optional[TokenPayload]:
        """
        Verify and decode a token.

        Args:
            token: JWT token string

        Returns:
            TokenPayload if valid, None if invalid or expired
        """
        try:
            data = jwt.decode(token, self.secret_key, algorithms=[ALGORITHM])
            payload = TokenPayload.from_dict(data)
        except (JWTError, KeyError, ValueError) as e:
            logger.debug(f"Token verification failed: {e}")
            return None

        if payload.exp < int(time.time()):
            logger.debug("Token expired")
            return None

        return payload
