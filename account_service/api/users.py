"""
User endpoints: password change, self deletion and lookups.
"""
from fastapi import APIRouter, Depends, Query
import structlog

from ..schemas.auth_schemas import (
    ErrorResponse,
    MessageResponse,
    PasswordChangeRequest,
    UserList,
    UserResponse,
)
from ..services.auth.credential_service import CredentialService
from ..services.user_service import UserService
from .deps import get_credential_service, get_current_user_id, get_user_service

logger = structlog.get_logger()
router = APIRouter(tags=["users"])


@router.put(
    "/user/update-password",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse}
    }
)
async def update_password(
    password_data: PasswordChangeRequest,
    user_id: int = Depends(get_current_user_id),
    credential_service: CredentialService = Depends(get_credential_service)
):
    """Change the caller's password. Existing tokens remain valid."""
    acknowledgement = await credential_service.update_password(
        user_id,
        password_data.current_password,
        password_data.new_password
    )
    return acknowledgement.to_dict()


@router.delete(
    "/user",
    response_model=MessageResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse}
    }
)
async def delete_current_user(
    user_id: int = Depends(get_current_user_id),
    credential_service: CredentialService = Depends(get_credential_service)
):
    acknowledgement = await credential_service.soft_delete_user(user_id)
    return acknowledgement.to_dict()


@router.get(
    "/users",
    response_model=UserList,
    responses={401: {"model": ErrorResponse}}
)
async def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    _: int = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service)
):
    users = await user_service.list_users(skip=skip, limit=limit)
    return {"users": users, "skip": skip, "limit": limit}


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse}
    }
)
async def get_user(
    user_id: int,
    _: int = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service)
):
    return await user_service.get_user(user_id)
