"""Staff availability router - FastAPI endpoints for weekly working windows"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import Role, User
from ...schemas import ApiResponse, MessageResponse
from ...shared.pagination import PaginationParams, paginate
from .schemas import AvailabilityCreate, AvailabilityUpdate, to_availability_response
from .service import StaffAvailabilityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/staff-availability", tags=["Staff Availability"])


def get_availability_service(db: Session = Depends(get_db)) -> StaffAvailabilityService:
    """Dependency injection for StaffAvailabilityService"""
    return StaffAvailabilityService(db)


@router.get("")
async def get_availability(
    pagination: PaginationParams = Depends(),
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: StaffAvailabilityService = Depends(get_availability_service),
):
    return paginate(service.list_availability(), pagination, to_availability_response)


@router.get("/availability/me")
async def get_my_availability(
    pagination: PaginationParams = Depends(),
    current_user: User = Depends(require_roles(Role.STAFF)),
    service: StaffAvailabilityService = Depends(get_availability_service),
):
    """Working windows of the authenticated staff member"""
    return paginate(service.list_for_staff(current_user.id), pagination, to_availability_response)


@router.get("/staff/{staff_id}")
async def get_staff_availability(
    staff_id: str,
    pagination: PaginationParams = Depends(),
    _user: User = Depends(get_current_user),
    service: StaffAvailabilityService = Depends(get_availability_service),
):
    return paginate(service.list_for_staff(staff_id), pagination, to_availability_response)


@router.post("", response_model=ApiResponse, status_code=201)
async def create_availability(
    data: AvailabilityCreate,
    current_user: User = Depends(require_roles(Role.ADMIN, Role.STAFF)),
    service: StaffAvailabilityService = Depends(get_availability_service),
):
    window = service.create_availability(data, current_user)
    return ApiResponse(
        message="Availability created successfully",
        data={
            "dayOfWeek": window.day_of_week,
            "startTime": window.start_time,
            "endTime": window.end_time,
            "staffAssociated": window.staff.name,
        },
    )


@router.put("/{availability_id}", response_model=ApiResponse)
async def update_availability(
    availability_id: str,
    data: AvailabilityUpdate,
    current_user: User = Depends(require_roles(Role.ADMIN, Role.STAFF)),
    service: StaffAvailabilityService = Depends(get_availability_service),
):
    window = service.update_availability(availability_id, data, current_user)
    return ApiResponse(message="Availability updated successfully", data=to_availability_response(window))


@router.delete("/{availability_id}", response_model=MessageResponse)
async def delete_availability(
    availability_id: str,
    current_user: User = Depends(require_roles(Role.ADMIN, Role.STAFF)),
    service: StaffAvailabilityService = Depends(get_availability_service),
):
    service.delete_availability(availability_id, current_user)
    return MessageResponse(message="Availability deleted successfully")


__all__ = [
    "router",
    "get_availability",
    "get_my_availability",
    "get_staff_availability",
    "create_availability",
    "update_availability",
    "delete_availability",
]
