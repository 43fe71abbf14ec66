"""Customer domain - Customer accounts (users with the CUSTOMER role)"""

from .router import router

__all__ = ["router"]
