"""Customer router - FastAPI endpoints for customer accounts"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from ...auth import require_roles
from ...database import get_db
from ...models import Role, User
from ...schemas import ApiResponse, MessageResponse
from ...shared.pagination import PaginationParams, paginate
from ..auth.schemas import EmailRequest, NewPasswordRequest
from ..users.schemas import PasswordChange, UserUpdate, to_user_response, to_user_summary
from .schemas import CustomerCreate, CustomerLogin, CustomerToken
from .service import CustomerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customer", tags=["Customers"])


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    """Dependency injection for CustomerService"""
    return CustomerService(db)


@router.get("")
async def get_customers(
    pagination: PaginationParams = Depends(),
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: CustomerService = Depends(get_customer_service),
):
    """List customers (admin only)"""
    result = paginate(service.list_customers(), pagination, to_user_response)
    if isinstance(result, list):
        return {"data": result}
    return result


@router.get("/email/{email}", response_model=ApiResponse)
async def get_customer_by_email(
    email: str,
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: CustomerService = Depends(get_customer_service),
):
    return ApiResponse(data=to_user_response(service.get_customer_by_email(email)))


@router.get("/{customer_id}", response_model=ApiResponse)
async def get_customer(
    customer_id: str,
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: CustomerService = Depends(get_customer_service),
):
    return ApiResponse(data=to_user_response(service.get_customer(customer_id)))


@router.post("", response_model=ApiResponse, status_code=201)
async def create_customer(data: CustomerCreate, service: CustomerService = Depends(get_customer_service)):
    """Customer self-registration"""
    customer = service.create_customer(data)
    return ApiResponse(message="Customer created successfully", data=to_user_summary(customer))


@router.post("/login", response_model=ApiResponse)
async def login(data: CustomerLogin, service: CustomerService = Depends(get_customer_service)):
    token, expires_in = service.login(data.email, data.password)
    return ApiResponse(data=CustomerToken(token=token, expiresIn=expires_in))


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(data: EmailRequest, service: CustomerService = Depends(get_customer_service)):
    await service.forgot_password(data.email)
    return MessageResponse(message="Password reset email sent successfully")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    data: NewPasswordRequest,
    token: Optional[str] = Header(None),
    service: CustomerService = Depends(get_customer_service),
):
    """Reset a password with the emailed token passed in the `token` header"""
    service.reset_password(token, data.newPassword, data.confirmNewPassword)
    return MessageResponse(message="Password reset successfully")


@router.put("/{customer_id}", response_model=MessageResponse)
async def update_customer(
    customer_id: str,
    data: UserUpdate,
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: CustomerService = Depends(get_customer_service),
):
    service.update_customer(customer_id, data)
    return MessageResponse(message="Customer updated successfully")


@router.put("/{customer_id}/password", response_model=MessageResponse)
async def change_password(
    customer_id: str,
    data: PasswordChange,
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: CustomerService = Depends(get_customer_service),
):
    service.change_password(customer_id, data)
    return MessageResponse(message="Password updated successfully")


@router.delete("/{customer_id}", response_model=MessageResponse)
async def delete_customer(
    customer_id: str,
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: CustomerService = Depends(get_customer_service),
):
    service.delete_customer(customer_id)
    return MessageResponse(message="Customer deleted successfully")


__all__ = [
    "router",
    "get_customers",
    "get_customer",
    "get_customer_by_email",
    "create_customer",
    "login",
    "forgot_password",
    "reset_password",
    "update_customer",
    "change_password",
    "delete_customer",
]
