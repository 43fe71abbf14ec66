"""Auth router - Login, session refresh, password reset and verification endpoints"""

import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Request, Response
from sqlalchemy.orm import Session

from ...config import IS_PRODUCTION, REFRESH_COOKIE_NAME, REFRESH_TOKEN_EXPIRE_DAYS
from ...database import get_db
from ...schemas import MessageResponse
from ...services.twilio_service import TwilioVerifyService, get_twilio_verify_service
from .schemas import (
    ConfirmEmailRequest,
    EmailRequest,
    LoginRequest,
    ResetPasswordRequest,
    SendOtpRequest,
    SendOtpResponse,
    TokenResponse,
    VerifyOtpRequest,
    VerifyOtpResponse,
)
from .service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

REFRESH_COOKIE_PATH = "/auth"


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(db)


def _set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=IS_PRODUCTION,
        samesite="strict",
        path=REFRESH_COOKIE_PATH,
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    request: Request,
    response: Response,
    service: AuthService = Depends(get_auth_service),
):
    """Exchange email and password for an access token and a refresh cookie"""
    access_token, expires_in, refresh_token = service.login(
        data.email,
        data.password,
        user_agent=request.headers.get("user-agent"),
        ip_address=request.client.host if request.client else None,
    )
    _set_refresh_cookie(response, refresh_token)
    return TokenResponse(accessToken=access_token, expiresIn=expires_in)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    response: Response,
    refresh_token: Optional[str] = Cookie(None, alias=REFRESH_COOKIE_NAME),
    service: AuthService = Depends(get_auth_service),
):
    """Rotate the refresh cookie and issue a new access token"""
    access_token, expires_in, new_refresh_token = service.refresh(refresh_token)
    _set_refresh_cookie(response, new_refresh_token)
    return TokenResponse(accessToken=access_token, expiresIn=expires_in)


@router.post("/logout", status_code=204)
async def logout(
    refresh_token: Optional[str] = Cookie(None, alias=REFRESH_COOKIE_NAME),
    service: AuthService = Depends(get_auth_service),
):
    """Revoke the current session and clear the refresh cookie"""
    service.logout(refresh_token)
    response = Response(status_code=204)
    response.delete_cookie(REFRESH_COOKIE_NAME, path=REFRESH_COOKIE_PATH)
    return response


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(data: EmailRequest, service: AuthService = Depends(get_auth_service)):
    await service.forgot_password(data.email)
    return MessageResponse(message="Password reset email sent successfully")


@router.post("/verify-email", response_model=MessageResponse)
async def verify_email(data: EmailRequest, service: AuthService = Depends(get_auth_service)):
    """Email a verification link to the account owner"""
    await service.send_verification_email(data.email)
    return MessageResponse(message="Verification email sent successfully")


@router.post("/confirm-email", response_model=MessageResponse)
async def confirm_email(data: ConfirmEmailRequest, service: AuthService = Depends(get_auth_service)):
    """Mark the email address as verified using the token from the emailed link"""
    service.confirm_email(data.token)
    return MessageResponse(message="Email verified successfully")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(data: ResetPasswordRequest, service: AuthService = Depends(get_auth_service)):
    service.reset_password(data.token, data.newPassword, data.confirmNewPassword)
    return MessageResponse(message="Password reset successfully")


@router.post("/send-otp", response_model=SendOtpResponse)
async def send_otp(
    data: SendOtpRequest,
    service: AuthService = Depends(get_auth_service),
    twilio: TwilioVerifyService = Depends(get_twilio_verify_service),
):
    """Send an SMS one-time code"""
    result = await service.send_otp(data.phone, twilio)
    return SendOtpResponse(**result)


@router.post("/verify-otp", response_model=VerifyOtpResponse)
async def verify_otp(
    data: VerifyOtpRequest,
    service: AuthService = Depends(get_auth_service),
    twilio: TwilioVerifyService = Depends(get_twilio_verify_service),
):
    """Check an SMS one-time code"""
    result = await service.verify_otp(data.phone, data.otp, twilio)
    return VerifyOtpResponse(**result)


__all__ = [
    "router",
    "login",
    "refresh",
    "logout",
    "forgot_password",
    "verify_email",
    "confirm_email",
    "reset_password",
    "send_otp",
    "verify_otp",
]
