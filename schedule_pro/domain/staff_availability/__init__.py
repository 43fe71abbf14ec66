"""Staff availability domain - Weekly recurring windows in which staff can be booked"""

from .router import router

__all__ = ["router"]
