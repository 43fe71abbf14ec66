"""User router - FastAPI endpoints for user accounts"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, get_optional_user, require_roles
from ...database import get_db
from ...models import Role, User
from ...schemas import ApiResponse, MessageResponse
from ...shared.pagination import PaginationParams, paginate
from .schemas import (
    PasswordChange,
    UserCreate,
    UserResponse,
    UserUpdate,
    to_user_response,
    to_user_summary,
)
from .service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


@router.get("")
async def get_users(
    pagination: PaginationParams = Depends(),
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: UserService = Depends(get_user_service),
):
    """List all users (admin only)"""
    return paginate(service.list_users(), pagination, to_user_response)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's profile"""
    return to_user_response(current_user)


@router.get("/email/{email}", response_model=UserResponse)
async def get_user_by_email(
    email: str,
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: UserService = Depends(get_user_service),
):
    return to_user_response(service.get_user_by_email(email))


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: UserService = Depends(get_user_service),
):
    return to_user_response(service.get_user(user_id))


@router.post("", response_model=ApiResponse, status_code=201)
async def create_user(
    data: UserCreate,
    caller: Optional[User] = Depends(get_optional_user),
    service: UserService = Depends(get_user_service),
):
    """Register a new user. Creating STAFF or ADMIN accounts requires an admin token"""
    user = service.create_user(data, caller)
    return ApiResponse(message="User created successfully", data=to_user_summary(user))


@router.put("/{user_id}", response_model=MessageResponse)
async def update_user(
    user_id: str,
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Update a profile (self or admin)"""
    service.ensure_can_manage(user_id, current_user)
    service.update_user(user_id, data)
    return MessageResponse(message="User updated successfully")


@router.put("/{user_id}/password", response_model=MessageResponse)
async def change_password(
    user_id: str,
    data: PasswordChange,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Change a password after confirming the current one (self or admin)"""
    service.ensure_can_manage(user_id, current_user)
    service.change_password(user_id, data)
    return MessageResponse(message="Password updated successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: UserService = Depends(get_user_service),
):
    service.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")


__all__ = [
    "router",
    "get_users",
    "get_me",
    "get_user",
    "get_user_by_email",
    "create_user",
    "update_user",
    "change_password",
    "delete_user",
]
