"""Service item repository - Database operations for the service catalog"""

from typing import Optional

from sqlalchemy.orm import Query, Session

from ...models import Appointment, ServiceItem


class ServiceItemRepository:
    """Repository for service item database operations"""

    @staticmethod
    def service_items_query(db: Session) -> Query:
        return db.query(ServiceItem).order_by(ServiceItem.type, ServiceItem.id)

    @staticmethod
    def get_service_item_by_id(db: Session, item_id: str) -> Optional[ServiceItem]:
        return db.query(ServiceItem).filter(ServiceItem.id == item_id).first()

    @staticmethod
    def create_service_item(db: Session, **item_data) -> ServiceItem:
        item = ServiceItem(**item_data)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def update_service_item(db: Session, item: ServiceItem, **updates) -> ServiceItem:
        for key, value in updates.items():
            if value is not None and hasattr(item, key):
                setattr(item, key, value)

        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def count_appointments(db: Session, item_id: str) -> int:
        return db.query(Appointment).filter(Appointment.service_id == item_id).count()

    @staticmethod
    def delete_service_item(db: Session, item: ServiceItem) -> None:
        db.delete(item)
        db.commit()
