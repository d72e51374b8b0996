"""
Authentication endpoints for the account service.
Implements registration, email verification, code reissue and login.
"""
from fastapi import APIRouter, Depends, status
import structlog

from ..schemas.auth_schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegistrationRequest,
    RegistrationResponse,
    ResendOTPResponse,
    VerifyEmailRequest,
)
from ..services.auth.authentication_service import AuthService
from .deps import get_auth_service, get_bearer_token, get_current_user_id

logger = structlog.get_logger()
router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse}
    }
)
async def register(
    registration_data: RegistrationRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new user.

    The account is created even when the verification email could not be
    sent; ``mail_dispatch`` reports what happened.
    """
    result = await auth_service.sign_up(
        first_name=registration_data.first_name,
        last_name=registration_data.last_name,
        email=registration_data.email,
        password=registration_data.password,
        phone=registration_data.phone
    )

    message = "User registered successfully."
    if not result.mail_dispatch.sent:
        message = "User registered, but the verification email could not be sent."

    return {
        "status": "success",
        "status_code": status.HTTP_201_CREATED,
        "message": message,
        "user": result.user,
        "access_token": result.access_token,
        "token_type": result.token_type,
        "mail_dispatch": result.mail_dispatch.to_dict()
    }


@router.post(
    "/verify-email",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse}
    }
)
async def verify_email(
    verification_data: VerifyEmailRequest,
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Verify the caller's email with the code they were sent."""
    acknowledgement = await auth_service.verify_email(token, verification_data.otp)
    return acknowledgement.to_dict()


@router.post(
    "/resend-otp",
    response_model=ResendOTPResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse}
    }
)
async def resend_otp(
    user_id: int = Depends(get_current_user_id),
    auth_service: AuthService = Depends(get_auth_service)
):
    mail_dispatch = await auth_service.resend_verification_otp(user_id)
    message = "Verification code sent." if mail_dispatch.sent else "Verification code could not be sent."
    return {
        "status": "success",
        "status_code": status.HTTP_200_OK,
        "message": message,
        "mail_dispatch": mail_dispatch.to_dict()
    }


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse}
    }
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Authenticate user and return an access token."""
    result = await auth_service.login(login_data.email, login_data.password)
    return {
        "access_token": result.access_token,
        "token_type": result.token_type,
        "user": result.user
    }
