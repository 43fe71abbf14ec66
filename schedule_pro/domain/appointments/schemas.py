"""Appointment schemas - Pydantic models for bookings"""

from datetime import date as Date
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import AppointmentStatus
from ...shared.validators import validate_time

# staffId value asking the system to pick the first available staff member
ANY_STAFF = "any"


class AppointmentCreate(BaseModel):
    customerId: str
    serviceId: str
    staffId: Optional[str] = None
    date: Date
    time: str
    notes: Optional[str] = Field(None, max_length=250)
    price: Optional[float] = Field(None, ge=0)

    @field_validator("time")
    @classmethod
    def validate_time_field(cls, v):
        return validate_time(v)


class AppointmentUpdate(BaseModel):
    serviceId: Optional[str] = None
    staffId: Optional[str] = None
    date: Optional[Date] = None
    time: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=250)
    price: Optional[float] = Field(None, ge=0)

    @field_validator("time")
    @classmethod
    def validate_time_field(cls, v):
        return validate_time(v)


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class AppointmentSummary(BaseModel):
    """Fields echoed back after booking"""

    notes: Optional[str] = None
    date: Date
    time: str
    status: str
    price: float
    staffName: Optional[str] = None
    serviceName: str


class AppointmentResponse(BaseModel):
    id: str
    notes: Optional[str] = None
    date: Date
    time: str
    status: str
    price: float
    customerId: str
    customerName: Optional[str] = None
    staffId: Optional[str] = None
    staffName: Optional[str] = None
    serviceId: str
    serviceName: Optional[str] = None
    duration: Optional[int] = None
    createdAt: Optional[datetime] = None


def to_appointment_summary(appointment) -> AppointmentSummary:
    return AppointmentSummary(
        notes=appointment.notes,
        date=appointment.date,
        time=appointment.time,
        status=appointment.status,
        price=appointment.price,
        staffName=appointment.staff.name if appointment.staff else None,
        serviceName=appointment.service.type,
    )


def to_appointment_response(appointment) -> AppointmentResponse:
    return AppointmentResponse(
        id=appointment.id,
        notes=appointment.notes,
        date=appointment.date,
        time=appointment.time,
        status=appointment.status,
        price=appointment.price,
        customerId=appointment.customer_id,
        customerName=appointment.customer.name if appointment.customer else None,
        staffId=appointment.staff_id,
        staffName=appointment.staff.name if appointment.staff else None,
        serviceId=appointment.service_id,
        serviceName=appointment.service.type if appointment.service else None,
        duration=appointment.duration,
        createdAt=appointment.created_at,
    )
