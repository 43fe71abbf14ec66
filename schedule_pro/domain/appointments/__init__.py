"""Appointment domain - Booking services with staff members"""

from .router import router

__all__ = ["router"]
