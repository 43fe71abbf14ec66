from typing import Any, Optional

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class ApiResponse(BaseModel):
    """Response envelope shared by every endpoint that returns more than a message"""

    message: Optional[str] = None
    data: Optional[Any] = None
    token: Optional[str] = None
    error: Optional[str] = None