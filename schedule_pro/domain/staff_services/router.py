"""Staff service router - FastAPI endpoints for staff/service links"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import Role, User
from ...schemas import ApiResponse, MessageResponse
from ...shared.pagination import PaginationParams, paginate
from .schemas import (
    ActiveStatusUpdate,
    CustomPriceUpdate,
    StaffServiceCreate,
    StaffServiceResponse,
    StaffServiceUpdate,
    to_staff_service_response,
)
from .service import StaffServiceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/staff-services", tags=["Staff Services"])


def get_staff_service_service(db: Session = Depends(get_db)) -> StaffServiceService:
    """Dependency injection for StaffServiceService"""
    return StaffServiceService(db)


@router.get("")
async def get_staff_services(
    pagination: PaginationParams = Depends(),
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: StaffServiceService = Depends(get_staff_service_service),
):
    return paginate(service.list_staff_services(), pagination, to_staff_service_response)


@router.get("/staffId/{staff_id}", response_model=list[StaffServiceResponse])
async def get_staff_services_by_staff(
    staff_id: str,
    _user: User = Depends(require_roles(Role.ADMIN, Role.STAFF)),
    service: StaffServiceService = Depends(get_staff_service_service),
):
    """Services offered by one staff member"""
    return [to_staff_service_response(link) for link in service.get_by_staff(staff_id)]


@router.get("/serviceId/{service_id}", response_model=list[StaffServiceResponse])
async def get_staff_services_by_service(
    service_id: str,
    _user: User = Depends(get_current_user),
    service: StaffServiceService = Depends(get_staff_service_service),
):
    """Staff members offering one service"""
    return [to_staff_service_response(link) for link in service.get_by_service(service_id)]


@router.post("", response_model=ApiResponse, status_code=201)
async def create_staff_service(
    data: StaffServiceCreate,
    current_user: User = Depends(require_roles(Role.ADMIN, Role.STAFF)),
    service: StaffServiceService = Depends(get_staff_service_service),
):
    link = service.create_staff_service(data, current_user)
    return ApiResponse(message="Relation created successfully", data=to_staff_service_response(link))


@router.put("/{link_id}", response_model=ApiResponse)
async def update_staff_service(
    link_id: str,
    data: StaffServiceUpdate,
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: StaffServiceService = Depends(get_staff_service_service),
):
    link = service.update_staff_service(link_id, data)
    return ApiResponse(message="Relation updated successfully", data=to_staff_service_response(link))


@router.patch("/active/{link_id}", response_model=MessageResponse)
async def set_active_status(
    link_id: str,
    data: ActiveStatusUpdate,
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: StaffServiceService = Depends(get_staff_service_service),
):
    service.set_active(link_id, data.active)
    return MessageResponse(message=f"Successfully updated active status to {str(data.active).lower()}")


@router.patch("/custom-price/{link_id}", response_model=MessageResponse)
async def set_custom_price(
    link_id: str,
    data: CustomPriceUpdate,
    current_user: User = Depends(require_roles(Role.ADMIN, Role.STAFF)),
    service: StaffServiceService = Depends(get_staff_service_service),
):
    service.set_custom_price(link_id, data.customPrice, current_user)
    return MessageResponse(message="Custom price updated successfully")


@router.delete("/{link_id}", response_model=MessageResponse)
async def delete_staff_service(
    link_id: str,
    current_user: User = Depends(require_roles(Role.ADMIN, Role.STAFF)),
    service: StaffServiceService = Depends(get_staff_service_service),
):
    service.delete_staff_service(link_id, current_user)
    return MessageResponse(message="Relation deleted successfully")


__all__ = [
    "router",
    "get_staff_services",
    "get_staff_services_by_staff",
    "get_staff_services_by_service",
    "create_staff_service",
    "update_staff_service",
    "set_active_status",
    "set_custom_price",
    "delete_staff_service",
]
