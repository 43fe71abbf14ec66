"""Staff availability repository - Database operations for working windows

Times are stored as zero-padded "HH:MM" strings, so string comparison in SQL
orders them the same way as the clock does.
"""

from typing import List, Optional

from sqlalchemy.orm import Query, Session, joinedload

from ...models import StaffAvailability


class StaffAvailabilityRepository:
    """Repository for staff availability database operations"""

    @staticmethod
    def availability_query(db: Session, staff_id: Optional[str] = None) -> Query:
        query = db.query(StaffAvailability).options(joinedload(StaffAvailability.staff))
        if staff_id is not None:
            query = query.filter(StaffAvailability.staff_id == staff_id)
        return query.order_by(
            StaffAvailability.day_of_week, StaffAvailability.start_time, StaffAvailability.id
        )

    @staticmethod
    def get_availability_by_id(db: Session, availability_id: str) -> Optional[StaffAvailability]:
        return db.query(StaffAvailability).filter(StaffAvailability.id == availability_id).first()

    @staticmethod
    def find_overlapping(
        db: Session,
        staff_id: str,
        day_of_week: int,
        start_time: str,
        end_time: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[StaffAvailability]:
        """First window of the staff member on that day intersecting [start_time, end_time)"""
        query = db.query(StaffAvailability).filter(
            StaffAvailability.staff_id == staff_id,
            StaffAvailability.day_of_week == day_of_week,
            StaffAvailability.start_time < end_time,
            StaffAvailability.end_time > start_time,
        )
        if exclude_id:
            query = query.filter(StaffAvailability.id != exclude_id)
        return query.first()

    @staticmethod
    def get_windows_for_day(db: Session, staff_id: str, day_of_week: int) -> List[StaffAvailability]:
        return (
            db.query(StaffAvailability)
            .filter(
                StaffAvailability.staff_id == staff_id,
                StaffAvailability.day_of_week == day_of_week,
            )
            .order_by(StaffAvailability.start_time)
            .all()
        )

    @staticmethod
    def create_availability(db: Session, **window_data) -> StaffAvailability:
        window = StaffAvailability(**window_data)
        db.add(window)
        db.commit()
        db.refresh(window)
        return window

    @staticmethod
    def update_availability(db: Session, window: StaffAvailability, **updates) -> StaffAvailability:
        for key, value in updates.items():
            if value is not None and hasattr(window, key):
                setattr(window, key, value)

        db.commit()
        db.refresh(window)
        return window

    @staticmethod
    def delete_availability(db: Session, window: StaffAvailability) -> None:
        db.delete(window)
        db.commit()
