"""User domain - Accounts, profiles and passwords"""

from .router import router

__all__ = ["router"]
