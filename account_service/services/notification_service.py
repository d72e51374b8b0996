"""
Notifiers that deliver email verification codes.
"""
import asyncio
import smtplib
import uuid
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional
import structlog

from ..core.logging import mask_email
from ..interfaces.notifier_interface import DispatchResult, INotifier

logger = structlog.get_logger()

VERIFICATION_SUBJECT = "Verify your email address"


def render_verification_body(otp: str, expire_minutes: int) -> str:
    return (
        "Welcome!\n\n"
        f"Your verification code is: {otp}\n\n"
        f"The code expires in {expire_minutes} minutes. "
        "If you did not create an account you can ignore this message.\n"
    )


class EmailNotifier(INotifier):
    """Sends verification codes over SMTP."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        from_email: str = "no-reply@example.com",
        from_name: str = "Account Service",
        expire_minutes: int = 10,
        timeout: float = 10.0
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.from_email = from_email
        self.from_name = from_name
        self.expire_minutes = expire_minutes
        self.timeout = timeout

    def _build_message(self, destination_email: str, otp: str, message_id: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = formataddr((self.from_name, self.from_email))
        msg["To"] = destination_email
        msg["Subject"] = VERIFICATION_SUBJECT
        msg["Message-ID"] = f"<{message_id}@{self.from_email.split('@')[-1]}>"
        msg.set_content(render_verification_body(otp, self.expire_minutes))
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)

    async def send(self, destination_email: str, otp: str) -> DispatchResult:
        message_id = uuid.uuid4().hex
        msg = self._build_message(destination_email, otp, message_id)

        try:
            # Blocking SMTP client runs in the default executor
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "Verification email delivery failed",
                destination=mask_email(destination_email),
                error=str(e)
            )
            return DispatchResult(
                sent=False,
                destination=destination_email,
                message_id=message_id,
                error=str(e)
            )

        logger.info("Verification email sent", destination=mask_email(destination_email), message_id=message_id)
        return DispatchResult(sent=True, destination=destination_email, message_id=message_id)


class LoggingNotifier(INotifier):
    """Development notifier used when SMTP is not configured."""

    def __init__(self, reveal_codes: bool = False):
        self.reveal_codes = reveal_codes

    async def send(self, destination_email: str, otp: str) -> DispatchResult:
        message_id = uuid.uuid4().hex
        logger.warning(
            "SMTP not configured; verification code not emailed",
            destination=mask_email(destination_email),
            message_id=message_id,
            otp=otp if self.reveal_codes else "***MASKED***"
        )
        return DispatchResult(
            sent=False,
            destination=destination_email,
            message_id=message_id,
            error="SMTP not configured"
        )
