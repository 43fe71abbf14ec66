"""
Typed API exceptions

Each exception carries a fixed HTTP status and a default message so services
can raise them without repeating status codes.
"""

from typing import Optional

from fastapi import HTTPException


class ScheduleProException(HTTPException):
    """Base class for exceptions with a fixed status and default detail"""

    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=self.status_code, detail=detail or self.default_detail, headers=headers
        )


class MissingRequiredPropertiesException(ScheduleProException):
    status_code = 400
    default_detail = "Some required properties are missing from the request."


class UserNotFoundException(ScheduleProException):
    status_code = 404
    default_detail = "User not found"


class InvalidCredentialsException(ScheduleProException):
    status_code = 401
    default_detail = "Please check your credentials before trying again."


class UserAlreadyRegisteredException(ScheduleProException):
    status_code = 409
    default_detail = (
        'Try logging in. If you dont remember your password, please use the "Forgot Password" option.'
    )
