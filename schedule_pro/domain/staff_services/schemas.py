"""Staff service schemas - Which staff members perform which services"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class StaffServiceCreate(BaseModel):
    staffId: str
    serviceId: str
    customPrice: Optional[float] = Field(None, ge=0)
    active: bool = True


class StaffServiceUpdate(BaseModel):
    staffId: Optional[str] = None
    serviceId: Optional[str] = None
    customPrice: Optional[float] = Field(None, ge=0)
    active: Optional[bool] = None


class ActiveStatusUpdate(BaseModel):
    active: bool


class CustomPriceUpdate(BaseModel):
    # null clears the override so the service base price applies again
    customPrice: Optional[float] = Field(..., ge=0)


class StaffServiceResponse(BaseModel):
    id: str
    staffId: str
    serviceId: str
    customPrice: Optional[float] = None
    active: bool
    staffName: Optional[str] = None
    serviceName: Optional[str] = None
    createdAt: Optional[datetime] = None


def to_staff_service_response(link) -> StaffServiceResponse:
    return StaffServiceResponse(
        id=link.id,
        staffId=link.staff_id,
        serviceId=link.service_id,
        customPrice=link.custom_price,
        active=link.active,
        staffName=link.staff.name if link.staff else None,
        serviceName=link.service.type if link.service else None,
        createdAt=link.created_at,
    )
