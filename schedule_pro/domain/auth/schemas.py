"""Auth domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_password


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    accessToken: str
    expiresIn: int


class EmailRequest(BaseModel):
    email: Optional[str] = None


class ConfirmEmailRequest(BaseModel):
    token: Optional[str] = None


class NewPasswordRequest(BaseModel):
    newPassword: str
    confirmNewPassword: str

    @field_validator("newPassword")
    @classmethod
    def validate_new_password(cls, v):
        return validate_password(v)


class ResetPasswordRequest(NewPasswordRequest):
    token: Optional[str] = None


class SendOtpRequest(BaseModel):
    phone: Optional[str] = None


class SendOtpResponse(BaseModel):
    status: str
    message: str


class VerifyOtpRequest(BaseModel):
    phone: Optional[str] = None
    otp: Optional[str] = None


class VerifyOtpResponse(BaseModel):
    success: bool
    message: str
