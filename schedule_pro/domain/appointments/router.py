"""Appointment router - FastAPI endpoints for bookings"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import Role, User
from ...schemas import ApiResponse, MessageResponse
from ...shared.pagination import PaginationParams, paginate
from .schemas import (
    AppointmentCreate,
    AppointmentStatusUpdate,
    AppointmentUpdate,
    to_appointment_response,
    to_appointment_summary,
)
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointment", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


@router.get("")
async def get_appointments(
    pagination: PaginationParams = Depends(),
    current_user: User = Depends(require_roles(Role.ADMIN, Role.CUSTOMER)),
    service: AppointmentService = Depends(get_appointment_service),
):
    """All appointments for admins; a customer's own appointments otherwise"""
    return paginate(service.list_appointments(current_user), pagination, to_appointment_response)


@router.get("/customer/{customer_id}")
async def get_customer_appointments(
    customer_id: str,
    pagination: PaginationParams = Depends(),
    current_user: User = Depends(require_roles(Role.ADMIN, Role.CUSTOMER)),
    service: AppointmentService = Depends(get_appointment_service),
):
    query = service.list_for_customer(customer_id, current_user)
    return paginate(query, pagination, to_appointment_response)


@router.get("/staff/{staff_id}")
async def get_staff_appointments(
    staff_id: str,
    pagination: PaginationParams = Depends(),
    current_user: User = Depends(require_roles(Role.ADMIN, Role.STAFF)),
    service: AppointmentService = Depends(get_appointment_service),
):
    query = service.list_for_staff(staff_id, current_user)
    return paginate(query, pagination, to_appointment_response)


@router.get("/{appointment_id}", response_model=ApiResponse)
async def get_appointment(
    appointment_id: str,
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    appointment = service.get_appointment(appointment_id, current_user)
    return ApiResponse(data=to_appointment_response(appointment))


@router.post("", response_model=ApiResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    current_user: User = Depends(require_roles(Role.ADMIN, Role.CUSTOMER)),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment. Pass staffId "any" (or omit it) to auto-assign staff"""
    appointment = await service.create_appointment(data, current_user)
    return ApiResponse(message="Appointment created successfully", data=to_appointment_summary(appointment))


@router.put("/{appointment_id}", response_model=MessageResponse)
async def update_appointment(
    appointment_id: str,
    data: AppointmentUpdate,
    current_user: User = Depends(require_roles(Role.ADMIN, Role.CUSTOMER)),
    service: AppointmentService = Depends(get_appointment_service),
):
    service.update_appointment(appointment_id, data, current_user)
    return MessageResponse(message="Appointment updated successfully")


@router.patch("/{appointment_id}/status", response_model=MessageResponse)
async def change_status(
    appointment_id: str,
    data: AppointmentStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    service.change_status(appointment_id, data.status, current_user)
    return MessageResponse(message="Appointment status changed successfully")


@router.delete("/{appointment_id}", response_model=MessageResponse)
async def delete_appointment(
    appointment_id: str,
    current_user: User = Depends(require_roles(Role.ADMIN, Role.CUSTOMER)),
    service: AppointmentService = Depends(get_appointment_service),
):
    service.delete_appointment(appointment_id, current_user)
    return MessageResponse(message="Appointment deleted successfully")


__all__ = [
    "router",
    "get_appointments",
    "get_customer_appointments",
    "get_staff_appointments",
    "get_appointment",
    "create_appointment",
    "update_appointment",
    "change_status",
    "delete_appointment",
]
