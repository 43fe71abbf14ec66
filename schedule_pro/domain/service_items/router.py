"""Service item router - FastAPI endpoints for the service catalog"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import Role, User
from ...schemas import ApiResponse, MessageResponse
from ...shared.pagination import PaginationParams, paginate
from .schemas import (
    ServiceItemCreate,
    ServiceItemResponse,
    ServiceItemUpdate,
    to_service_item_response,
)
from .service import ServiceItemService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/service-item", tags=["Service Items"])


def get_service_item_service(db: Session = Depends(get_db)) -> ServiceItemService:
    """Dependency injection for ServiceItemService"""
    return ServiceItemService(db)


@router.get("")
async def get_service_items(
    pagination: PaginationParams = Depends(),
    _user: User = Depends(get_current_user),
    service: ServiceItemService = Depends(get_service_item_service),
):
    return paginate(service.list_service_items(), pagination, to_service_item_response)


@router.get("/{item_id}", response_model=ServiceItemResponse)
async def get_service_item(
    item_id: str,
    _user: User = Depends(get_current_user),
    service: ServiceItemService = Depends(get_service_item_service),
):
    return to_service_item_response(service.get_service_item(item_id))


@router.post("", response_model=ApiResponse, status_code=201)
async def create_service_item(
    data: ServiceItemCreate,
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: ServiceItemService = Depends(get_service_item_service),
):
    item = service.create_service_item(data)
    return ApiResponse(message="Service created successfully", data=to_service_item_response(item))


@router.put("/{item_id}", response_model=MessageResponse)
async def update_service_item(
    item_id: str,
    data: ServiceItemUpdate,
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: ServiceItemService = Depends(get_service_item_service),
):
    service.update_service_item(item_id, data)
    return MessageResponse(message="Service updated successfully")


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_service_item(
    item_id: str,
    _admin: User = Depends(require_roles(Role.ADMIN)),
    service: ServiceItemService = Depends(get_service_item_service),
):
    service.delete_service_item(item_id)
    return MessageResponse(message="Service deleted successfully")


__all__ = [
    "router",
    "get_service_items",
    "get_service_item",
    "create_service_item",
    "update_service_item",
    "delete_service_item",
]
