"""Auth domain - Login, sessions, password reset and phone/email verification"""

from .router import router

__all__ = ["router"]
