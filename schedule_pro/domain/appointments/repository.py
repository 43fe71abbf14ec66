"""Appointment repository - Database operations for bookings"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Query, Session, joinedload

from ...models import Appointment, AppointmentStatus


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def appointments_query(
        db: Session, customer_id: Optional[str] = None, staff_id: Optional[str] = None
    ) -> Query:
        query = db.query(Appointment).options(
            joinedload(Appointment.customer),
            joinedload(Appointment.staff),
            joinedload(Appointment.service),
        )
        if customer_id is not None:
            query = query.filter(Appointment.customer_id == customer_id)
        if staff_id is not None:
            query = query.filter(Appointment.staff_id == staff_id)
        return query.order_by(Appointment.date.desc(), Appointment.time.desc(), Appointment.id)

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: str) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def get_staff_bookings(
        db: Session, staff_id: str, day: date, exclude_id: Optional[str] = None
    ) -> list[Appointment]:
        """Non-cancelled appointments of a staff member on one day"""
        query = (
            db.query(Appointment)
            .options(joinedload(Appointment.service))
            .filter(
                Appointment.staff_id == staff_id,
                Appointment.date == day,
                Appointment.status != AppointmentStatus.CANCELLED.value,
            )
        )
        if exclude_id:
            query = query.filter(Appointment.id != exclude_id)
        return query.all()

    @staticmethod
    def create_appointment(db: Session, **appointment_data) -> Appointment:
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update_appointment(db: Session, appointment: Appointment, **updates) -> Appointment:
        for key, value in updates.items():
            if value is not None and hasattr(appointment, key):
                setattr(appointment, key, value)

        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        db.delete(appointment)
        db.commit()
