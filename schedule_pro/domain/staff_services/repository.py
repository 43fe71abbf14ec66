"""Staff service repository - Database operations for staff/service links"""

from typing import Optional

from sqlalchemy.orm import Query, Session, joinedload

from ...models import StaffService


class StaffServiceRepository:
    """Repository for staff/service link database operations"""

    @staticmethod
    def staff_services_query(db: Session) -> Query:
        return (
            db.query(StaffService)
            .options(joinedload(StaffService.staff), joinedload(StaffService.service))
            .order_by(StaffService.created_at.desc(), StaffService.id)
        )

    @staticmethod
    def get_staff_service_by_id(db: Session, link_id: str) -> Optional[StaffService]:
        return db.query(StaffService).filter(StaffService.id == link_id).first()

    @staticmethod
    def get_by_staff(db: Session, staff_id: str) -> list[StaffService]:
        return (
            db.query(StaffService)
            .options(joinedload(StaffService.service))
            .filter(StaffService.staff_id == staff_id)
            .order_by(StaffService.created_at)
            .all()
        )

    @staticmethod
    def get_by_service(db: Session, service_id: str) -> list[StaffService]:
        return (
            db.query(StaffService)
            .options(joinedload(StaffService.staff))
            .filter(StaffService.service_id == service_id)
            .order_by(StaffService.created_at)
            .all()
        )

    @staticmethod
    def get_by_pair(db: Session, staff_id: str, service_id: str) -> Optional[StaffService]:
        return (
            db.query(StaffService)
            .filter(StaffService.staff_id == staff_id, StaffService.service_id == service_id)
            .first()
        )

    @staticmethod
    def get_active_by_service(db: Session, service_id: str) -> list[StaffService]:
        """Active links for a service, oldest first"""
        return (
            db.query(StaffService)
            .filter(StaffService.service_id == service_id, StaffService.active.is_(True))
            .order_by(StaffService.created_at, StaffService.id)
            .all()
        )

    @staticmethod
    def create_staff_service(db: Session, **link_data) -> StaffService:
        link = StaffService(**link_data)
        db.add(link)
        db.commit()
        db.refresh(link)
        return link

    @staticmethod
    def update_staff_service(db: Session, link: StaffService, **updates) -> StaffService:
        """Apply updates; unlike other repositories None is written through"""
        for key, value in updates.items():
            if hasattr(link, key):
                setattr(link, key, value)

        db.commit()
        db.refresh(link)
        return link

    @staticmethod
    def delete_staff_service(db: Session, link: StaffService) -> None:
        db.delete(link)
        db.commit()
