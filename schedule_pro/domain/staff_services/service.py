"""Staff service service - Business logic for staff/service links"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Query, Session

from ...models import Role, StaffService, User
from ..service_items.service import ServiceItemService
from ..users.service import UserService
from .repository import StaffServiceRepository
from .schemas import StaffServiceCreate, StaffServiceUpdate

logger = logging.getLogger(__name__)


class StaffServiceService:
    """Service layer for staff/service link business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = StaffServiceRepository()
        self.users = UserService(db)
        self.service_items = ServiceItemService(db)

    @staticmethod
    def _ensure_own_link(staff_id: str, caller: User) -> None:
        """Staff members may only manage their own links"""
        if caller.role == Role.STAFF.value and caller.id != staff_id:
            logger.warning(f"⚠️ Staff {caller.id} attempted to manage links of {staff_id}")
            raise HTTPException(status_code=403, detail="Staff members can only manage their own services")

    def list_staff_services(self) -> Query:
        return self.repo.staff_services_query(self.db)

    def get_staff_service(self, link_id: str) -> StaffService:
        link = self.repo.get_staff_service_by_id(self.db, link_id)
        if not link:
            raise HTTPException(status_code=404, detail="Relation not found")
        return link

    def get_by_staff(self, staff_id: str) -> list[StaffService]:
        links = self.repo.get_by_staff(self.db, staff_id)
        if not links:
            raise HTTPException(status_code=404, detail="No services related for this staff")
        return links

    def get_by_service(self, service_id: str) -> list[StaffService]:
        self.service_items.get_service_item(service_id)
        return self.repo.get_by_service(self.db, service_id)

    def create_staff_service(self, data: StaffServiceCreate, caller: User) -> StaffService:
        logger.info(f"📥 Linking staff {data.staffId} to service {data.serviceId}")
        self._ensure_own_link(data.staffId, caller)
        self.users.get_staff_member(data.staffId)
        self.service_items.get_service_item(data.serviceId)

        if self.repo.get_by_pair(self.db, data.staffId, data.serviceId):
            raise HTTPException(status_code=409, detail="Staff member already offers this service")

        return self.repo.create_staff_service(
            self.db,
            staff_id=data.staffId,
            service_id=data.serviceId,
            custom_price=data.customPrice,
            active=data.active,
        )

    def update_staff_service(self, link_id: str, data: StaffServiceUpdate) -> StaffService:
        link = self.get_staff_service(link_id)

        staff_id = data.staffId or link.staff_id
        service_id = data.serviceId or link.service_id
        self.users.get_staff_member(staff_id)
        self.service_items.get_service_item(service_id)

        existing = self.repo.get_by_pair(self.db, staff_id, service_id)
        if existing and existing.id != link.id:
            raise HTTPException(status_code=409, detail="Staff member already offers this service")

        updates = {"staff_id": staff_id, "service_id": service_id}
        if "customPrice" in data.model_fields_set:
            updates["custom_price"] = data.customPrice
        if data.active is not None:
            updates["active"] = data.active
        return self.repo.update_staff_service(self.db, link, **updates)

    def set_active(self, link_id: str, active: bool) -> StaffService:
        link = self.get_staff_service(link_id)
        logger.info(f"🔁 Setting staff service {link_id} active={active}")
        return self.repo.update_staff_service(self.db, link, active=active)

    def set_custom_price(self, link_id: str, custom_price, caller: User) -> StaffService:
        link = self.get_staff_service(link_id)
        self._ensure_own_link(link.staff_id, caller)
        return self.repo.update_staff_service(self.db, link, custom_price=custom_price)

    def delete_staff_service(self, link_id: str, caller: User) -> None:
        link = self.get_staff_service(link_id)
        self._ensure_own_link(link.staff_id, caller)
        self.repo.delete_staff_service(self.db, link)
        logger.info(f"🗑️ Deleted staff service {link_id}")
