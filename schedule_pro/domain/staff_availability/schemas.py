"""Staff availability schemas - Weekly recurring working windows"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import validate_time


class AvailabilityCreate(BaseModel):
    staffId: str
    dayOfWeek: int = Field(ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    startTime: str
    endTime: str

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_time_fields(cls, v):
        return validate_time(v)

    @model_validator(mode="after")
    def check_window(self):
        if self.startTime >= self.endTime:
            raise ValueError("startTime must be before endTime")
        return self


class AvailabilityUpdate(BaseModel):
    staffId: Optional[str] = None
    dayOfWeek: Optional[int] = Field(None, ge=0, le=6)
    startTime: Optional[str] = None
    endTime: Optional[str] = None

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_time_fields(cls, v):
        return validate_time(v)


class AvailabilityResponse(BaseModel):
    id: str
    staffId: str
    dayOfWeek: int
    startTime: str
    endTime: str
    staffAssociated: Optional[str] = None
    createdAt: Optional[datetime] = None


def to_availability_response(window) -> AvailabilityResponse:
    return AvailabilityResponse(
        id=window.id,
        staffId=window.staff_id,
        dayOfWeek=window.day_of_week,
        startTime=window.start_time,
        endTime=window.end_time,
        staffAssociated=window.staff.name if window.staff else None,
        createdAt=window.created_at,
    )
