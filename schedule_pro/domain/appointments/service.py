"""Appointment service - Booking, staff assignment and availability checks

A staff member can take a booking for a service at (date, time) when:
- they offer the service through an active staff service link
- their weekly availability windows for that weekday, with touching or
  overlapping windows merged, cover [time, time + duration]
- none of their non-cancelled appointments that day overlaps it
"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Query, Session

from ... import email_service
from ...email_service import EmailDeliveryError
from ...models import Appointment, AppointmentStatus, Role, ServiceItem, StaffService, User
from ...shared.validators import add_minutes, day_of_week, time_to_minutes
from ..service_items.service import ServiceItemService
from ..staff_availability.repository import StaffAvailabilityRepository
from ..staff_services.repository import StaffServiceRepository
from ..users.service import UserService
from .repository import AppointmentRepository
from .schemas import ANY_STAFF, AppointmentCreate, AppointmentUpdate

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60
STAFF_NOT_AVAILABLE = "Staff member is not available at this time"
NO_STAFF_AVAILABLE = "No staff available at this time."


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.users = UserService(db)
        self.service_items = ServiceItemService(db)
        self.staff_services = StaffServiceRepository()
        self.availability = StaffAvailabilityRepository()

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def _unavailable_reason(
        self,
        staff_id: str,
        service: ServiceItem,
        day: date,
        time: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[str]:
        """None when the staff member can take the slot, otherwise why not"""
        link = self.staff_services.get_by_pair(self.db, staff_id, service.id)
        if not link or not link.active:
            return "does not offer this service"

        start = time_to_minutes(time)
        end = start + service.duration
        if end > MINUTES_PER_DAY:
            return "appointment would run past midnight"

        if not self._covered(staff_id, day_of_week(day), start, end):
            return "no availability window covers the slot"

        # Half-open intervals: back-to-back bookings do not conflict
        for booking in self.repo.get_staff_bookings(self.db, staff_id, day, exclude_id):
            booked_start = time_to_minutes(booking.time)
            booked_end = booked_start + booking.duration
            if booked_start < end and booked_end > start:
                return f"overlaps appointment {booking.id}"
        return None

    def _covered(self, staff_id: str, weekday: int, start: int, end: int) -> bool:
        """True when the staff member's windows, merged, contain [start, end] in minutes"""
        merged = []
        for window in self.availability.get_windows_for_day(self.db, staff_id, weekday):
            window_start = time_to_minutes(window.start_time)
            window_end = time_to_minutes(window.end_time)
            if merged and window_start <= merged[-1][1]:
                merged[-1][1] = max(merged[-1][1], window_end)
            else:
                merged.append([window_start, window_end])
        return any(s <= start and end <= e for s, e in merged)

    def find_available_staff(
        self, service: ServiceItem, day: date, time: str, exclude_id: Optional[str] = None
    ) -> Optional[User]:
        """First staff member, by link age, able to take the slot"""
        for link in self.staff_services.get_active_by_service(self.db, service.id):
            if link.staff.role != Role.STAFF.value:
                continue
            if self._unavailable_reason(link.staff_id, service, day, time, exclude_id) is None:
                return link.staff
        return None

    def _resolve_staff(
        self,
        staff_id: Optional[str],
        service: ServiceItem,
        day: date,
        time: str,
        exclude_id: Optional[str] = None,
    ) -> User:
        if not staff_id or staff_id == ANY_STAFF:
            staff = self.find_available_staff(service, day, time, exclude_id)
            if not staff:
                logger.warning(f"⚠️ No staff free for service {service.id} on {day} at {time}")
                raise HTTPException(status_code=400, detail=NO_STAFF_AVAILABLE)
            logger.info(f"👤 Auto-assigned staff {staff.id} for {day} {time}")
            return staff

        staff = self.users.get_staff_member(staff_id)
        reason = self._unavailable_reason(staff.id, service, day, time, exclude_id)
        if reason:
            logger.warning(f"⚠️ Staff {staff.id} unavailable on {day} at {time}: {reason}")
            raise HTTPException(status_code=409, detail=STAFF_NOT_AVAILABLE)
        return staff

    def _price_for(self, staff: User, service: ServiceItem) -> float:
        link: Optional[StaffService] = self.staff_services.get_by_pair(self.db, staff.id, service.id)
        if link and link.custom_price is not None:
            return link.custom_price
        return service.price

    # ------------------------------------------------------------------
    # Access rules
    # ------------------------------------------------------------------

    @staticmethod
    def _ensure_can_view(appointment: Appointment, caller: User) -> None:
        if caller.role == Role.CUSTOMER.value and appointment.customer_id != caller.id:
            raise HTTPException(status_code=403, detail="You can only access your own appointments")
        if caller.role == Role.STAFF.value and appointment.staff_id != caller.id:
            raise HTTPException(status_code=403, detail="You can only access your own appointments")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_appointments(self, caller: User) -> Query:
        if caller.role == Role.CUSTOMER.value:
            return self.repo.appointments_query(self.db, customer_id=caller.id)
        return self.repo.appointments_query(self.db)

    def list_for_customer(self, customer_id: str, caller: User) -> Query:
        if caller.role == Role.CUSTOMER.value and caller.id != customer_id:
            raise HTTPException(status_code=403, detail="You can only access your own appointments")
        self.users.get_customer_member(customer_id)
        return self.repo.appointments_query(self.db, customer_id=customer_id)

    def list_for_staff(self, staff_id: str, caller: User) -> Query:
        if caller.role == Role.STAFF.value and caller.id != staff_id:
            raise HTTPException(status_code=403, detail="You can only access your own appointments")
        self.users.get_staff_member(staff_id)
        return self.repo.appointments_query(self.db, staff_id=staff_id)

    def get_appointment(self, appointment_id: str, caller: Optional[User] = None) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")
        if caller is not None:
            self._ensure_can_view(appointment, caller)
        return appointment

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create_appointment(self, data: AppointmentCreate, caller: User) -> Appointment:
        """Book an appointment and email the customer; the booking is undone if the email fails"""
        logger.info(
            f"📥 Booking service {data.serviceId} for customer {data.customerId} on {data.date} at {data.time}"
        )
        if caller.role == Role.CUSTOMER.value and caller.id != data.customerId:
            raise HTTPException(status_code=403, detail="Customers can only book for themselves")

        customer = self.users.get_customer_member(data.customerId)
        service = self.service_items.get_service_item(data.serviceId)
        staff = self._resolve_staff(data.staffId, service, data.date, data.time)

        price = self._price_for(staff, service)
        if data.price is not None:
            if caller.role == Role.ADMIN.value:
                price = data.price
            else:
                logger.info(f"ℹ️ Ignoring price override from non-admin {caller.id}")

        appointment = self.repo.create_appointment(
            self.db,
            customer_id=customer.id,
            staff_id=staff.id,
            service_id=service.id,
            date=data.date,
            time=data.time,
            notes=data.notes,
            price=price,
            duration=service.duration,
            status=AppointmentStatus.PENDING.value,
        )

        try:
            await email_service.send_appointment_confirmation(
                to=customer.email,
                customer_name=customer.name,
                service_name=service.type,
                staff_name=staff.name,
                date=data.date.isoformat(),
                start_time=data.time,
                end_time=add_minutes(data.time, service.duration),
                price=price,
                notes=data.notes,
            )
        except EmailDeliveryError as email_error:
            logger.error(f"❌ Confirmation email failed for appointment {appointment.id}: {email_error}")
            self.repo.delete_appointment(self.db, appointment)
            raise HTTPException(
                status_code=502, detail="Failed to send appointment confirmation email"
            ) from email_error

        logger.info(f"✅ Appointment {appointment.id} booked with staff {staff.id}")
        return appointment

    def update_appointment(self, appointment_id: str, data: AppointmentUpdate, caller: User) -> Appointment:
        appointment = self.get_appointment(appointment_id, caller)

        service = appointment.service
        if data.serviceId and data.serviceId != appointment.service_id:
            service = self.service_items.get_service_item(data.serviceId)
        day = data.date or appointment.date
        time = data.time or appointment.time

        slot_changed = (
            service.id != appointment.service_id
            or day != appointment.date
            or time != appointment.time
            or (data.staffId is not None and data.staffId != appointment.staff_id)
        )

        updates = {"notes": data.notes}
        if slot_changed:
            requested_staff = data.staffId if data.staffId is not None else appointment.staff_id
            staff = self._resolve_staff(requested_staff, service, day, time, exclude_id=appointment.id)
            updates.update(
                service_id=service.id,
                staff_id=staff.id,
                date=day,
                time=time,
                price=self._price_for(staff, service),
                duration=service.duration,
            )
            logger.info(f"🔁 Rescheduling appointment {appointment.id} to {day} {time} with staff {staff.id}")

        if data.price is not None:
            if caller.role != Role.ADMIN.value:
                raise HTTPException(status_code=403, detail="Only administrators can change the price")
            updates["price"] = data.price

        return self.repo.update_appointment(self.db, appointment, **updates)

    def change_status(self, appointment_id: str, status: AppointmentStatus, caller: User) -> Appointment:
        appointment = self.get_appointment(appointment_id, caller)
        logger.info(f"🔁 Appointment {appointment.id}: {appointment.status} -> {status.value}")

        updates = {"status": status.value}
        # The slot may have been rebooked while this one was cancelled
        if appointment.status == AppointmentStatus.CANCELLED.value and status != AppointmentStatus.CANCELLED:
            staff = self._resolve_staff(
                appointment.staff_id,
                appointment.service,
                appointment.date,
                appointment.time,
                exclude_id=appointment.id,
            )
            updates["staff_id"] = staff.id
        return self.repo.update_appointment(self.db, appointment, **updates)

    def delete_appointment(self, appointment_id: str, caller: User) -> None:
        appointment = self.get_appointment(appointment_id, caller)
        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"🗑️ Deleted appointment {appointment_id}")
