"""
Token service focused solely on JWT access token operations.
"""

from typing import Optional, Dict, Any
from datetime import timedelta
from jose import ExpiredSignatureError, JWTError, jwt
import structlog

from ...core.exceptions import InvalidTokenError
from ...core.security import utcnow

logger = structlog.get_logger()

ACCESS_TOKEN_TYPE = "access"


class TokenService:
    """Signs and verifies bearer tokens carrying a user id claim."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)

    def issue(self, user_id: int, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create JWT access token.

        Args:
            user_id: User ID placed in the ``sub`` claim
            expires_delta: Custom lifetime, defaults to the configured one

        Returns:
            Encoded JWT
        """
        issued_at = utcnow()
        claims = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + (expires_delta if expires_delta is not None else self.expires_delta),
            "type": ACCESS_TOKEN_TYPE,
        }
        token = jwt.encode(claims, self.secret_key, algorithm=self.algorithm)
        logger.debug("Access token issued", user_id=user_id)
        return token

    def decode(self, token: str) -> Dict[str, Any]:
        """Decode and validate a token, returning its claims."""
        if not token:
            logger.info("Token rejected", reason="missing")
            raise InvalidTokenError()

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.info("Token rejected", reason="expired")
            raise InvalidTokenError()
        except JWTError as e:
            logger.info("Token rejected", reason="invalid", error=str(e))
            raise InvalidTokenError()

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            logger.info("Token rejected", reason="wrong_type")
            raise InvalidTokenError()

        return payload

    def verify(self, token: str) -> int:
        """
        Verify a token and return the user id it asserts.

        Raises:
            InvalidTokenError: malformed, bad signature, wrong type or expired
        """
        payload = self.decode(token)
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            logger.info("Token rejected", reason="bad_subject")
            raise InvalidTokenError()
