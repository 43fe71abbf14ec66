"""Service item domain - The catalog of bookable services"""

from .router import router

__all__ = ["router"]
