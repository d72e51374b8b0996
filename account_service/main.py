"""
FastAPI application entry point for the account service.
"""
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog
import uvicorn

from .api.auth import router as auth_router
from .api.users import router as users_router
from .container.container import Container
from .core.config import Settings, get_settings
from .core.database import check_connection
from .core.exceptions import AccountError, BadRequestError, InternalError
from .core.logging import configure_logging

logger = structlog.get_logger()


def create_app(settings: Optional[Settings] = None, container: Optional[Container] = None) -> FastAPI:
    """Factory function to create the FastAPI app."""
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan context manager.
        Handles startup and shutdown events.
        """
        logger.info("Starting account service", version=settings.VERSION, environment=settings.ENVIRONMENT)

        app.state.container = container or Container(settings)
        try:
            await app.state.container.initialize()
            yield
        finally:
            logger.info("Shutting down account service")
            await app.state.container.cleanup()
            logger.info("Account service shutdown complete")

    app = FastAPI(
        title=settings.APP_NAME,
        description="User accounts: registration, email verification and login",
        version=settings.VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan
    )

    @app.exception_handler(AccountError)
    async def account_exception_handler(request: Request, exc: AccountError):
        """Render domain failures in the standard envelope."""
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "Request failed",
            path=request.url.path,
            error_code=exc.kind.value,
            status_code=exc.status_code
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors."""
        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
            for error in exc.errors()
        ]
        logger.warning("Validation error", errors=errors, path=request.url.path)

        error = BadRequestError("Invalid request body.")
        content = error.to_dict()
        content["errors"] = errors
        return JSONResponse(status_code=error.status_code, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "status": "unsuccessful",
                "status_code": exc.status_code,
                "message": str(exc.detail),
                "error_code": f"HTTP_{exc.status_code}"
            }
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=InternalError().to_dict()
        )

    @app.get("/health", tags=["health"])
    async def health_check(request: Request):
        """Liveness plus a database round trip."""
        database_ok = await check_connection(request.app.state.container.engine)
        return {
            "status": "healthy" if database_ok else "degraded",
            "service": "account-service",
            "version": settings.VERSION,
            "checks": {"database": database_ok}
        }

    app.include_router(auth_router, prefix=settings.API_V1_STR)
    app.include_router(users_router, prefix=settings.API_V1_STR)

    return app


def run_dev():
    """Run development server."""
    uvicorn.run(
        "account_service.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="debug"
    )


def run_prod():
    """Run production server."""
    uvicorn.run(
        "account_service.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level="info",
        access_log=False  # Use structured logging instead
    )


if __name__ == "__main__":
    if get_settings().DEBUG:
        run_dev()
    else:
        run_prod()
