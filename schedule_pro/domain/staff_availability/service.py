"""Staff availability service - Business logic for weekly working windows"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Query, Session

from ...models import Role, StaffAvailability, User
from ..users.service import UserService
from .repository import StaffAvailabilityRepository
from .schemas import AvailabilityCreate, AvailabilityUpdate

logger = logging.getLogger(__name__)

ALREADY_AVAILABLE = "Staff member is already available on the given day and time"


class StaffAvailabilityService:
    """Service layer for staff availability business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = StaffAvailabilityRepository()
        self.users = UserService(db)

    @staticmethod
    def _ensure_own_window(staff_id: str, caller: User) -> None:
        if caller.role == Role.STAFF.value and caller.id != staff_id:
            logger.warning(f"⚠️ Staff {caller.id} attempted to manage availability of {staff_id}")
            raise HTTPException(status_code=403, detail="Staff members can only manage their own availability")

    def _check_conflict(
        self, staff_id: str, day_of_week: int, start_time: str, end_time: str, exclude_id: Optional[str] = None
    ) -> None:
        conflict = self.repo.find_overlapping(
            self.db, staff_id, day_of_week, start_time, end_time, exclude_id
        )
        if conflict:
            logger.warning(
                f"⚠️ Availability {start_time}-{end_time} on day {day_of_week} for staff {staff_id} "
                f"overlaps window {conflict.id} ({conflict.start_time}-{conflict.end_time})"
            )
            raise HTTPException(status_code=409, detail=ALREADY_AVAILABLE)

    def list_availability(self) -> Query:
        return self.repo.availability_query(self.db)

    def list_for_staff(self, staff_id: str) -> Query:
        self.users.get_staff_member(staff_id)
        return self.repo.availability_query(self.db, staff_id)

    def get_availability(self, availability_id: str) -> StaffAvailability:
        window = self.repo.get_availability_by_id(self.db, availability_id)
        if not window:
            raise HTTPException(status_code=404, detail="Availability not found")
        return window

    def create_availability(self, data: AvailabilityCreate, caller: User) -> StaffAvailability:
        logger.info(
            f"📥 Creating availability for staff {data.staffId}: day {data.dayOfWeek} {data.startTime}-{data.endTime}"
        )
        self._ensure_own_window(data.staffId, caller)
        self.users.get_staff_member(data.staffId)
        self._check_conflict(data.staffId, data.dayOfWeek, data.startTime, data.endTime)

        return self.repo.create_availability(
            self.db,
            staff_id=data.staffId,
            day_of_week=data.dayOfWeek,
            start_time=data.startTime,
            end_time=data.endTime,
        )

    def update_availability(
        self, availability_id: str, data: AvailabilityUpdate, caller: User
    ) -> StaffAvailability:
        window = self.get_availability(availability_id)
        self._ensure_own_window(window.staff_id, caller)

        staff_id = data.staffId or window.staff_id
        day_of_week = data.dayOfWeek if data.dayOfWeek is not None else window.day_of_week
        start_time = data.startTime or window.start_time
        end_time = data.endTime or window.end_time

        if start_time >= end_time:
            raise HTTPException(status_code=400, detail="startTime must be before endTime")
        if staff_id != window.staff_id:
            self._ensure_own_window(staff_id, caller)
            self.users.get_staff_member(staff_id)
        self._check_conflict(staff_id, day_of_week, start_time, end_time, exclude_id=window.id)

        return self.repo.update_availability(
            self.db,
            window,
            staff_id=staff_id,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
        )

    def delete_availability(self, availability_id: str, caller: User) -> None:
        window = self.get_availability(availability_id)
        self._ensure_own_window(window.staff_id, caller)
        self.repo.delete_availability(self.db, window)
        logger.info(f"🗑️ Deleted availability {availability_id}")
