"""
Typed success payloads returned by the account services.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from ...interfaces.notifier_interface import DispatchResult


@dataclass
class Acknowledgement:
    """Plain success acknowledgement with the message shown to the caller."""

    message: str
    status_code: int = 200

    def to_dict(self) -> Dict[str, Any]:
        return {"status": "success", "status_code": self.status_code, "message": self.message}


@dataclass
class SignUpResult:
    user: Dict[str, Any]
    mail_dispatch: DispatchResult
    access_token: str
    token_type: str = field(default="bearer")


@dataclass
class LoginResult:
    access_token: str
    user: Dict[str, Any]
    token_type: str = field(default="bearer")
