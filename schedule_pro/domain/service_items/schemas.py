"""Service item schemas - Pydantic models for the service catalog"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ServiceItemCreate(BaseModel):
    type: str = Field(min_length=1, max_length=255)
    price: float = Field(ge=0)
    duration: int = Field(gt=0, description="Duration in minutes")

    @field_validator("type")
    @classmethod
    def strip_type(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Service type is required")
        return v


class ServiceItemUpdate(BaseModel):
    type: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[float] = Field(None, ge=0)
    duration: Optional[int] = Field(None, gt=0)


class ServiceItemResponse(BaseModel):
    id: str
    type: str
    price: float
    duration: int
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


def to_service_item_response(item) -> ServiceItemResponse:
    return ServiceItemResponse(
        id=item.id,
        type=item.type,
        price=item.price,
        duration=item.duration,
        createdAt=item.created_at,
        updatedAt=item.updated_at,
    )
