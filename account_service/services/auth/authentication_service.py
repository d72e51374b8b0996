"""
Authentication service: sign-up, email verification and login.

A user moves from unregistered to pending verification on sign-up and to
verified after presenting the emailed one-time code before it expires.
"""

import hmac
from datetime import timedelta
from typing import Any, Optional, Union
import structlog

from ...core.exceptions import (
    AccountError,
    BadRequestError,
    ConflictError,
    ExpiredError,
    InternalError,
    InvalidCredentialError,
    NotFoundError,
)
from ...core.logging import mask_email
from ...core.security import OTPGenerator, PasswordHasher, as_utc, utcnow
from ...events.account_events import (
    EmailVerificationFailedEvent,
    EmailVerifiedEvent,
    LoginFailedEvent,
    UserLoggedInEvent,
    UserRegisteredEvent,
    VerificationCodeIssuedEvent,
)
from ...interfaces.event_interface import IEventBus
from ...interfaces.notifier_interface import DispatchResult, INotifier
from ...interfaces.repository_interface import IUserRepository
from ...models.user import Profile, User, UserRelation
from .results import Acknowledgement, LoginResult, SignUpResult
from .token_service import TokenService

logger = structlog.get_logger()

LOGIN_FAILED_MESSAGE = "Invalid email or password."
EMAIL_VERIFIED_MESSAGE = "Email successfully verified"


class AuthService:
    """Service responsible for registration, verification and login."""

    def __init__(
        self,
        user_repository: IUserRepository,
        password_hasher: PasswordHasher,
        otp_generator: OTPGenerator,
        token_service: TokenService,
        notifier: INotifier,
        event_bus: IEventBus,
        otp_expire_minutes: int = 10,
        require_verified_email: bool = False
    ):
        self.user_repository = user_repository
        self.password_hasher = password_hasher
        self.otp_generator = otp_generator
        self.token_service = token_service
        self.notifier = notifier
        self.event_bus = event_bus
        self.otp_expires_delta = timedelta(minutes=otp_expire_minutes)
        self.require_verified_email = require_verified_email

    async def sign_up(
        self,
        first_name: Optional[str],
        last_name: Optional[str],
        email: str,
        password: str,
        phone: Optional[str] = None
    ) -> SignUpResult:
        """
        Register a new, unverified user and email them a verification code.

        Delivery failures are reported in the result; the account is kept.

        Raises:
            BadRequestError: email or password missing
            ConflictError: email already registered, including deleted accounts
        """
        normalized_email = User.normalize_email(email)
        if not normalized_email or not password:
            raise BadRequestError("Email and password must be provided.")

        try:
            existing = await self.user_repository.get_by_email(normalized_email, include_deleted=True)
            if existing:
                logger.info("Sign-up rejected: email already registered", email="***MASKED***")
                raise ConflictError("User already exists.")

            password_hash = self.password_hasher.hash(password)
            otp = self.otp_generator.generate()

            user = User(
                email=normalized_email,
                password_hash=password_hash,
                is_verified=False,
                is_deleted=False,
                profile=Profile(
                    first_name=first_name,
                    last_name=last_name,
                    phone=phone,
                    avatar_url=""
                )
            )
            user.set_otp(otp, utcnow() + self.otp_expires_delta)
            user = await self.user_repository.save(user)

            access_token = self.token_service.issue(user.id)

        except AccountError:
            raise
        except Exception as e:
            logger.error("Sign-up failed", email="***MASKED***", error=str(e))
            raise InternalError("Sign-up failed.") from e

        mail_dispatch = await self._dispatch_otp(user.email, otp)

        await self.event_bus.publish(
            UserRegisteredEvent(user_id=user.id, verification_sent=mail_dispatch.sent)
        )
        logger.info("User registered", user_id=user.id, verification_sent=mail_dispatch.sent)

        return SignUpResult(
            user=user.to_public_dict(),
            mail_dispatch=mail_dispatch,
            access_token=access_token
        )

    async def verify_email(self, token: str, submitted_otp: Union[str, int, None]) -> Acknowledgement:
        """
        Mark the token holder's email as verified.

        The code is single-use: success clears it, so replaying it fails.

        Raises:
            InvalidTokenError: token malformed, forged or expired
            NotFoundError: no such user, or no code pending
            InvalidCredentialError: code does not match
            ExpiredError: code matched but is past its expiry
        """
        user_id = self.token_service.verify(token)

        try:
            user = await self.user_repository.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found.")

            if not user.has_pending_otp:
                await self._verification_failed(user.id, "no_pending_code")
                raise NotFoundError("No pending verification code.")

            if not self._codes_match(submitted_otp, user.otp):
                await self._verification_failed(user.id, "code_mismatch")
                raise InvalidCredentialError("Invalid verification code.")

            if as_utc(user.otp_expires_at) <= utcnow():
                await self._verification_failed(user.id, "code_expired")
                raise ExpiredError("Verification code has expired.")

            user.is_verified = True
            user.clear_otp()
            await self.user_repository.save(user)

        except AccountError:
            raise
        except Exception as e:
            logger.error("Email verification failed", user_id=user_id, error=str(e))
            raise InternalError("Email verification failed.") from e

        await self.event_bus.publish(EmailVerifiedEvent(user_id=user_id))
        logger.info("Email verified successfully", user_id=user_id)
        return Acknowledgement(message=EMAIL_VERIFIED_MESSAGE)

    async def resend_verification_otp(self, user_id: int) -> DispatchResult:
        """Issue a fresh code to a user who has not verified yet."""
        try:
            user = await self.user_repository.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found.")

            if user.is_verified:
                raise BadRequestError("Email already verified.")

            otp = self.otp_generator.generate()
            user.set_otp(otp, utcnow() + self.otp_expires_delta)
            user = await self.user_repository.save(user)

        except AccountError:
            raise
        except Exception as e:
            logger.error("Verification code reissue failed", user_id=user_id, error=str(e))
            raise InternalError("Failed to resend verification code.") from e

        mail_dispatch = await self._dispatch_otp(user.email, otp)
        await self.event_bus.publish(
            VerificationCodeIssuedEvent(user_id=user_id, sent=mail_dispatch.sent)
        )
        return mail_dispatch

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Authenticate by email and password.

        Unknown email, deleted account and wrong password all fail with the
        same message.
        """
        try:
            normalized_email = User.normalize_email(email)
            user = None
            if normalized_email:
                user = await self.user_repository.get_by_email(
                    normalized_email,
                    relations=(UserRelation.PROFILE,)
                )

            if not user:
                self.password_hasher.dummy_verify()
                await self._log_failed_login("user_not_found")
                raise InvalidCredentialError(LOGIN_FAILED_MESSAGE)

            if not self.password_hasher.verify(password, user.password_hash):
                await self._log_failed_login("invalid_password", user.id)
                raise InvalidCredentialError(LOGIN_FAILED_MESSAGE)

            if self.require_verified_email and not user.is_verified:
                await self._log_failed_login("email_not_verified", user.id)
                raise InvalidCredentialError("Email address has not been verified.")

            access_token = self.token_service.issue(user.id)

        except AccountError:
            raise
        except Exception as e:
            logger.error("Authentication failed", email="***MASKED***", error=str(e))
            raise InternalError("Authentication failed.") from e

        await self.event_bus.publish(UserLoggedInEvent(user_id=user.id))
        logger.info("User authenticated successfully", user_id=user.id)

        return LoginResult(access_token=access_token, user=user.to_public_dict())

    async def _dispatch_otp(self, email: str, otp: str) -> DispatchResult:
        """Send the code; never lets a delivery problem fail the caller."""
        try:
            return await self.notifier.send(email, otp)
        except Exception as e:
            logger.error("Notifier raised while sending code", destination=mask_email(email), error=str(e))
            return DispatchResult(sent=False, destination=email, error=str(e))

    @staticmethod
    def _codes_match(submitted: Any, stored: str) -> bool:
        if submitted is None or isinstance(submitted, bool):
            return False
        candidate = str(submitted).strip()
        if not candidate:
            return False
        return hmac.compare_digest(candidate.encode("utf-8"), stored.encode("utf-8"))

    async def _verification_failed(self, user_id: int, reason: str) -> None:
        await self.event_bus.publish(EmailVerificationFailedEvent(user_id=user_id, reason=reason))

    async def _log_failed_login(self, reason: str, user_id: Optional[int] = None) -> None:
        """Log failed login attempt."""
        await self.event_bus.publish(LoginFailedEvent(reason=reason, user_id=user_id))
