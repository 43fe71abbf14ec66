"""Service item service - Business logic for the service catalog"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Query, Session

from ...models import ServiceItem
from .repository import ServiceItemRepository
from .schemas import ServiceItemCreate, ServiceItemUpdate

logger = logging.getLogger(__name__)


class ServiceItemService:
    """Service layer for service item business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceItemRepository()

    def list_service_items(self) -> Query:
        return self.repo.service_items_query(self.db)

    def get_service_item(self, item_id: str) -> ServiceItem:
        item = self.repo.get_service_item_by_id(self.db, item_id)
        if not item:
            raise HTTPException(status_code=404, detail="Service not found")
        return item

    def create_service_item(self, data: ServiceItemCreate) -> ServiceItem:
        logger.info(f"📥 Creating service item: {data.type}")
        return self.repo.create_service_item(
            self.db, type=data.type, price=data.price, duration=data.duration
        )

    def update_service_item(self, item_id: str, data: ServiceItemUpdate) -> ServiceItem:
        item = self.get_service_item(item_id)
        return self.repo.update_service_item(
            self.db,
            item,
            type=data.type.strip() if data.type else None,
            price=data.price,
            duration=data.duration,
        )

    def delete_service_item(self, item_id: str) -> None:
        """Delete a catalog entry; entries referenced by appointments are kept"""
        item = self.get_service_item(item_id)

        booked = self.repo.count_appointments(self.db, item_id)
        if booked:
            logger.warning(f"⚠️ Refused to delete service item {item_id} with {booked} appointment(s)")
            raise HTTPException(
                status_code=409, detail="Service has appointments and cannot be deleted"
            )

        self.repo.delete_service_item(self.db, item)
        logger.info(f"🗑️ Deleted service item {item_id}")
