"""Staff service domain - Links between staff members and the services they perform"""

from .router import router

__all__ = ["router"]
