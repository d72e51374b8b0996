"""
User and Profile models.
The password hash never leaves the model through a projection or repr.
"""
from enum import Enum
from typing import Any, Dict, Optional
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Index, inspect
from sqlalchemy.orm import relationship

from .base import BaseModel, SoftDeleteMixin


class UserRelation(str, Enum):
    """Relations a repository lookup may be asked to load."""

    PROFILE = "profile"


class Profile(BaseModel):
    """Personal details owned by exactly one user."""

    __tablename__ = 'profile'

    user_id = Column(Integer, ForeignKey('user.id', ondelete='CASCADE'), unique=True, nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    phone = Column(String(32), nullable=True)
    avatar_url = Column(String(500), nullable=False, default="")

    def to_public_dict(self) -> Dict[str, Any]:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "avatar_url": self.avatar_url or "",
        }


class User(BaseModel, SoftDeleteMixin):
    """Identity record with credential and verification state."""

    __tablename__ = 'user'

    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    # Pending email verification code; both set or both null
    otp = Column(String(10), nullable=True)
    otp_expires_at = Column(DateTime(timezone=True), nullable=True)

    # Loaded only when requested through UserRelation.PROFILE
    profile = relationship(
        "Profile",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="raise"
    )

    __table_args__ = (
        Index('idx_user_deleted_verified', 'is_deleted', 'is_verified'),
    )

    @staticmethod
    def normalize_email(email: str) -> str:
        return (email or "").strip().lower()

    @property
    def has_pending_otp(self) -> bool:
        return self.otp is not None and self.otp_expires_at is not None

    def set_otp(self, code: str, expires_at) -> None:
        self.otp = code
        self.otp_expires_at = expires_at

    def clear_otp(self) -> None:
        self.otp = None
        self.otp_expires_at = None

    def loaded_profile(self) -> Optional[Profile]:
        """Profile if it was loaded with the user, otherwise None."""
        if "profile" in inspect(self).unloaded:
            return None
        return self.profile

    def to_public_dict(self) -> Dict[str, Any]:
        """Public projection: never includes the password hash or the OTP."""
        profile = self.loaded_profile()
        return {
            "id": self.id,
            "email": self.email,
            "is_verified": bool(self.is_verified),
            "profile": profile.to_public_dict() if profile else None,
        }

    def to_dict(self, exclude: Optional[set] = None) -> Dict[str, Any]:
        exclude = set(exclude or set()) | {"password_hash", "otp"}
        return super().to_dict(exclude)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email=***MASKED***)>"
