from datetime import datetime, timezone
from typing import Optional
from passlib import exc as passlib_exc
from passlib.context import CryptContext
import secrets
import structlog

from .exceptions import BadRequestError, HashingError

logger = structlog.get_logger()


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (SQLite drops tzinfo) as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class PasswordHasher:
    """
    One-way salted password hashing.

    New hashes use passlib's bcrypt_sha256, which digests the whole secret
    before bcrypt sees it, so bytes past 72 count and NUL bytes are allowed.
    Plain bcrypt hashes still verify.
    """

    def __init__(self, rounds: int = 12):
        self.pwd_context = CryptContext(
            schemes=["bcrypt_sha256", "bcrypt"],
            deprecated="auto",
            bcrypt_sha256__rounds=rounds,
            bcrypt__rounds=rounds
        )

    def hash(self, password: str) -> str:
        """Generate password hash"""
        try:
            return self.pwd_context.hash(password)
        except passlib_exc.PasswordValueError as e:
            logger.warning("Password rejected by hasher", error_type=type(e).__name__)
            raise BadRequestError("Password is not acceptable.") from e
        except Exception as e:
            logger.error("Password hashing failed", error_type=type(e).__name__)
            raise HashingError() from e

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash. Never raises on mismatch."""
        if not plain_password or not hashed_password:
            return False
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.warning("Stored password hash could not be verified", error_type=type(e).__name__)
            return False

    def dummy_verify(self) -> None:
        """Spend comparable time to a real verification when no user exists."""
        self.pwd_context.dummy_verify()


class OTPGenerator:
    """Fixed-width numeric one-time codes from a cryptographically secure source."""

    def __init__(self, length: int = 6):
        if length < 1:
            raise ValueError("OTP length must be positive")
        self.length = length

    def generate(self) -> str:
        # Uniform over the n-digit numbers, so there is never a leading zero
        lower = 10 ** (self.length - 1)
        return str(lower + secrets.randbelow(9 * lower))
