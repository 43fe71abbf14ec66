import enum
import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_uuid():
    """Generate a string UUID primary key"""
    return str(uuid.uuid4())


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    STAFF = "STAFF"
    CUSTOMER = "CUSTOMER"


class AppointmentStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    phone = Column(String(20), unique=True, index=True, nullable=False)  # E.164
    photo = Column(String(500), nullable=True)
    role = Column(String(20), default=Role.CUSTOMER.value, nullable=False)
    email_verified_at = Column(DateTime, nullable=True)
    phone_verified_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
    availabilities = relationship(
        "StaffAvailability", back_populates="staff", cascade="all, delete-orphan"
    )
    staff_services = relationship(
        "StaffService", back_populates="staff", cascade="all, delete-orphan"
    )
    customer_appointments = relationship(
        "Appointment",
        back_populates="customer",
        foreign_keys="Appointment.customer_id",
        cascade="all, delete-orphan",
    )
    # Staff deletion leaves the appointments in place with no staff assigned
    staff_appointments = relationship(
        "Appointment", back_populates="staff", foreign_keys="Appointment.staff_id"
    )


class UserSession(Base):
    __tablename__ = "user_sessions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    refresh_token = Column(String(255), unique=True, index=True, nullable=False)
    user_agent = Column(String(500), nullable=True)
    ip_address = Column(String(64), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    expires_at = Column(DateTime, nullable=False)

    user = relationship("User", back_populates="sessions")


class ServiceItem(Base):
    __tablename__ = "service_items"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    type = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    staff_services = relationship(
        "StaffService", back_populates="service", cascade="all, delete-orphan"
    )
    appointments = relationship("Appointment", back_populates="service")


class StaffService(Base):
    __tablename__ = "staff_services"
    __table_args__ = (UniqueConstraint("staff_id", "service_id", name="uq_staff_service"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    staff_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(
        String(36), ForeignKey("service_items.id", ondelete="CASCADE"), nullable=False, index=True
    )
    custom_price = Column(Float, nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    staff = relationship("User", back_populates="staff_services")
    service = relationship("ServiceItem", back_populates="staff_services")


class StaffAvailability(Base):
    __tablename__ = "staff_availability"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    staff_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday ... 6 = Saturday
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM
    created_at = Column(DateTime, server_default=func.now())

    staff = relationship("User", back_populates="availabilities")


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    notes = Column(String(250), nullable=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)  # HH:MM
    status = Column(String(20), default=AppointmentStatus.PENDING.value, nullable=False)
    price = Column(Float, nullable=False)
    duration = Column(Integer, nullable=False)  # minutes, fixed at booking time
    customer_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    staff_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    service_id = Column(String(36), ForeignKey("service_items.id"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    customer = relationship(
        "User", back_populates="customer_appointments", foreign_keys=[customer_id]
    )
    staff = relationship("User", back_populates="staff_appointments", foreign_keys=[staff_id])
    service = relationship("ServiceItem", back_populates="appointments")
