"""
Error taxonomy for the account service.

Every failure raised by a service is an ``AccountError`` subclass carrying a
stable machine-checkable kind, the status class it maps to at the HTTP
boundary, and a human-readable message.
"""
from enum import Enum
from typing import Any, Dict


class ErrorKind(str, Enum):
    """Closed set of failure kinds."""

    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    EXPIRED = "EXPIRED"
    INVALID_TOKEN = "INVALID_TOKEN"
    BAD_REQUEST = "BAD_REQUEST"
    HASHING_ERROR = "HASHING_ERROR"
    INTERNAL = "INTERNAL"


class AccountError(Exception):
    """Base class for all classified service failures."""

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = 500
    default_message: str = "Internal server error."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "unsuccessful",
            "status_code": self.status_code,
            "message": self.message,
            "error_code": self.kind.value,
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(kind={self.kind.value}, message={self.message!r})>"


class ConflictError(AccountError):
    kind = ErrorKind.CONFLICT
    status_code = 409
    default_message = "User already exists."


class NotFoundError(AccountError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404
    default_message = "User not found."


class InvalidCredentialError(AccountError):
    kind = ErrorKind.INVALID_CREDENTIAL
    status_code = 401
    default_message = "Invalid email or password."


class ExpiredError(AccountError):
    kind = ErrorKind.EXPIRED
    status_code = 400
    default_message = "Verification code has expired."


class InvalidTokenError(AccountError):
    kind = ErrorKind.INVALID_TOKEN
    status_code = 401
    default_message = "Invalid or expired token."


class BadRequestError(AccountError):
    kind = ErrorKind.BAD_REQUEST
    status_code = 400
    default_message = "Bad request."


class HashingError(AccountError):
    kind = ErrorKind.HASHING_ERROR
    status_code = 500
    default_message = "Password hashing failed."


class InternalError(AccountError):
    kind = ErrorKind.INTERNAL
    status_code = 500
    default_message = "Internal server error."
