"""User domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import Role
from ...shared.validators import validate_email, validate_name, validate_password, validate_phone


class AccountCreate(BaseModel):
    """Fields shared by every registration form"""

    name: str
    email: str
    password: str
    phone: str
    photo: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name_field(cls, v):
        return validate_name(v)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_field(cls, v):
        return validate_phone(v)

    @field_validator("password")
    @classmethod
    def validate_password_field(cls, v):
        return validate_password(v)


class UserCreate(AccountCreate):
    """Schema for registering a new user with an explicit role"""

    role: Role = Role.CUSTOMER


class UserUpdate(BaseModel):
    """Schema for updating profile fields"""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    photo: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name_field(cls, v):
        return validate_name(v)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_field(cls, v):
        return validate_phone(v)


class PasswordChange(BaseModel):
    currentPassword: str
    newPassword: str
    confirmNewPassword: str

    @field_validator("newPassword")
    @classmethod
    def validate_new_password(cls, v):
        return validate_password(v)


class UserResponse(BaseModel):
    """Public user representation; never includes the password hash"""

    id: str
    name: str
    email: str
    phone: str
    photo: Optional[str] = None
    role: str
    emailVerifiedAt: Optional[datetime] = None
    phoneVerifiedAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None


class UserSummary(BaseModel):
    """Fields echoed back after registration"""

    name: str
    email: str
    phone: str
    photo: Optional[str] = None
    role: str


def to_user_response(user) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        phone=user.phone,
        photo=user.photo,
        role=user.role,
        emailVerifiedAt=user.email_verified_at,
        phoneVerifiedAt=user.phone_verified_at,
        createdAt=user.created_at,
    )


def to_user_summary(user) -> UserSummary:
    return UserSummary(name=user.name, email=user.email, phone=user.phone, photo=user.photo, role=user.role)
