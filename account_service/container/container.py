"""
Dependency injection container implementation.
Builds the account service object graph once per application and hands out
the shared instances.
"""

from typing import Any, Dict, Optional, Type, TypeVar
import structlog
from sqlalchemy.ext.asyncio import AsyncEngine

from ..core.config import Settings
from ..core.database import (
    close_db_connections,
    create_engine_from_settings,
    create_session_factory,
    init_models,
)
from ..core.security import OTPGenerator, PasswordHasher
from ..events.audit_handlers import AuditEventHandler
from ..events.event_bus import ALL_EVENTS, InMemoryEventBus
from ..interfaces.event_interface import IEventBus
from ..interfaces.notifier_interface import INotifier
from ..interfaces.repository_interface import IUserRepository
from ..repositories.user_repository import UserRepository
from ..services.auth.authentication_service import AuthService
from ..services.auth.credential_service import CredentialService
from ..services.auth.token_service import TokenService
from ..services.notification_service import EmailNotifier, LoggingNotifier
from ..services.user_service import UserService

logger = structlog.get_logger()

T = TypeVar('T')


class Container:
    """Dependency injection container."""

    def __init__(
        self,
        settings: Settings,
        engine: Optional[AsyncEngine] = None,
        notifier: Optional[INotifier] = None
    ):
        self.settings = settings
        self.engine = engine or create_engine_from_settings(settings)
        self.session_factory = create_session_factory(self.engine)
        self._instances: Dict[str, Any] = {}
        self._notifier_override = notifier
        self._initialized = False
        self._build()

    def register_instance(self, interface: Type[T], instance: T) -> None:
        """
        Register a specific instance for an interface.

        Args:
            interface: Interface type
            instance: Instance to register
        """
        key = interface.__name__
        self._instances[key] = instance
        logger.debug("Registered instance", interface=key, instance=type(instance).__name__)

    def get(self, interface: Type[T]) -> T:
        """
        Get service instance by interface type.

        Raises:
            ValueError: If service is not registered
        """
        key = interface.__name__
        if key not in self._instances:
            raise ValueError(f"Service not registered: {key}")
        return self._instances[key]

    def _build_notifier(self) -> INotifier:
        if self._notifier_override is not None:
            return self._notifier_override

        settings = self.settings
        if settings.smtp_enabled:
            return EmailNotifier(
                host=settings.SMTP_HOST,
                port=settings.SMTP_PORT,
                username=settings.SMTP_USER,
                password=settings.SMTP_PASSWORD,
                use_tls=settings.SMTP_TLS,
                from_email=settings.EMAILS_FROM_EMAIL,
                from_name=settings.EMAILS_FROM_NAME,
                expire_minutes=settings.OTP_EXPIRE_MINUTES
            )

        logger.warning("SMTP_HOST not set; verification codes will only be logged")
        return LoggingNotifier(reveal_codes=settings.DEBUG)

    def _build(self) -> None:
        settings = self.settings

        user_repository = UserRepository(self.session_factory)
        password_hasher = PasswordHasher(rounds=settings.PASSWORD_HASH_ROUNDS)
        token_service = TokenService(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
        event_bus = InMemoryEventBus()
        notifier = self._build_notifier()

        self.register_instance(IUserRepository, user_repository)
        self.register_instance(PasswordHasher, password_hasher)
        self.register_instance(TokenService, token_service)
        self.register_instance(IEventBus, event_bus)
        self.register_instance(INotifier, notifier)

        self.register_instance(AuthService, AuthService(
            user_repository=user_repository,
            password_hasher=password_hasher,
            otp_generator=OTPGenerator(length=settings.OTP_LENGTH),
            token_service=token_service,
            notifier=notifier,
            event_bus=event_bus,
            otp_expire_minutes=settings.OTP_EXPIRE_MINUTES,
            require_verified_email=settings.REQUIRE_VERIFIED_EMAIL_FOR_LOGIN
        ))
        self.register_instance(CredentialService, CredentialService(
            user_repository=user_repository,
            password_hasher=password_hasher,
            event_bus=event_bus
        ))
        self.register_instance(UserService, UserService(user_repository))

    async def initialize(self) -> None:
        """Subscribe audit logging and create tables when configured."""
        if self._initialized:
            return

        try:
            audit_handler = AuditEventHandler()
            await self.get(IEventBus).subscribe(ALL_EVENTS, audit_handler.handle_event)

            if self.settings.DATABASE_CREATE_TABLES:
                await init_models(self.engine)

            self._initialized = True
            logger.info("Dependency injection container initialized successfully")

        except Exception as e:
            logger.error("Failed to initialize container", error=str(e))
            raise

    async def cleanup(self) -> None:
        """Cleanup container resources."""
        try:
            await close_db_connections(self.engine)
            logger.info("Container cleanup completed")
        except Exception as e:
            logger.error("Container cleanup failed", error=str(e))
