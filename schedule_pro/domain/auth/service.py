"""Auth service - Login, refresh sessions, password reset and verification flows"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ... import email_service
from ...config import ACTION_TOKEN_EXPIRE_MINUTES, FRONTEND_URL, REFRESH_TOKEN_EXPIRE_DAYS
from ...email_service import EmailDeliveryError
from ...exceptions import MissingRequiredPropertiesException, UserNotFoundException
from ...models import User
from ...security import (
    EMAIL_VERIFICATION_TOKEN_TYPE,
    PASSWORD_RESET_TOKEN_TYPE,
    create_access_token,
    create_action_token,
    generate_secure_token,
    hash_password_bcrypt,
    password_fingerprint,
    verify_jwt_token,
    verify_password_bcrypt,
)
from ...services.twilio_service import TwilioVerifyService
from ...shared.validators import validate_phone
from ..users.repository import UserRepository
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Service layer for authentication flows"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SessionRepository()
        self.users = UserRepository()

    # ------------------------------------------------------------------
    # Password login and refresh sessions
    # ------------------------------------------------------------------

    def login(
        self,
        email: str,
        password: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> tuple[str, int, str]:
        """Check credentials and open a session. Returns (access_token, expires_in, refresh_token)"""
        user = self.users.get_user_by_email(self.db, email)
        if not user or not verify_password_bcrypt(password, user.password):
            logger.warning(f"⚠️ Failed login for {email}")
            raise HTTPException(status_code=401, detail="Invalid credentials")

        refresh_token = generate_secure_token()
        self.repo.create_session(
            self.db,
            user_id=user.id,
            refresh_token=refresh_token,
            expires_at=datetime.utcnow() + timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS),
            user_agent=user_agent,
            ip_address=ip_address,
        )
        access_token, expires_in = create_access_token(user)
        logger.info(f"✅ User {user.id} logged in")
        return access_token, expires_in, refresh_token

    def refresh(self, refresh_token: Optional[str]) -> tuple[str, int, str]:
        """Rotate a refresh session. Returns (access_token, expires_in, new_refresh_token)"""
        if not refresh_token:
            raise HTTPException(status_code=401, detail="Missing refresh token")

        session = self.repo.get_session_by_token(self.db, refresh_token)
        if not session or session.expires_at < datetime.utcnow():
            if session:
                self.repo.delete_session(self.db, session)
            logger.warning("⚠️ Refresh attempted with unknown or expired session")
            raise HTTPException(status_code=401, detail="Invalid or expired refresh token")

        user = self.users.get_user_by_id(self.db, session.user_id)
        if not user:
            raise UserNotFoundException()

        new_refresh_token = generate_secure_token()
        self.repo.rotate_session(
            self.db,
            session,
            new_refresh_token,
            datetime.utcnow() + timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS),
        )
        access_token, expires_in = create_access_token(user)
        logger.info(f"🔄 Session refreshed for user {user.id}")
        return access_token, expires_in, new_refresh_token

    def logout(self, refresh_token: Optional[str]) -> None:
        if not refresh_token:
            return
        session = self.repo.get_session_by_token(self.db, refresh_token)
        if session:
            self.repo.delete_session(self.db, session)
            logger.info(f"👋 Session revoked for user {session.user_id}")

    # ------------------------------------------------------------------
    # Emailed links
    # ------------------------------------------------------------------

    def _get_user_for_email(self, email: Optional[str]) -> User:
        if not email:
            raise MissingRequiredPropertiesException()
        user = self.users.get_user_by_email(self.db, email)
        if not user:
            raise UserNotFoundException()
        return user

    async def forgot_password(self, email: Optional[str]) -> None:
        user = self._get_user_for_email(email)
        token = create_action_token(user, PASSWORD_RESET_TOKEN_TYPE, ACTION_TOKEN_EXPIRE_MINUTES)
        reset_link = f"{FRONTEND_URL}/reset-password?token={token}"

        try:
            await email_service.send_password_reset_email(
                user.email, reset_link, ACTION_TOKEN_EXPIRE_MINUTES
            )
        except EmailDeliveryError as email_error:
            logger.error(f"❌ Failed to send password reset email to {user.email}: {email_error}")
            raise HTTPException(status_code=502, detail="Failed to send password reset email") from email_error

        logger.info(f"📧 Password reset email sent to user {user.id}")

    async def send_verification_email(self, email: Optional[str]) -> None:
        user = self._get_user_for_email(email)
        token = create_action_token(user, EMAIL_VERIFICATION_TOKEN_TYPE, ACTION_TOKEN_EXPIRE_MINUTES)
        verify_link = f"{FRONTEND_URL}/verify-email?token={token}"

        try:
            await email_service.send_email_verification(user.email, user.name, verify_link)
        except EmailDeliveryError as email_error:
            logger.error(f"❌ Failed to send verification email to {user.email}: {email_error}")
            raise HTTPException(status_code=502, detail="Failed to send verification email") from email_error

        logger.info(f"📧 Verification email sent to user {user.id}")

    def _user_from_action_token(self, token: Optional[str], token_type: str) -> User:
        if not token:
            raise MissingRequiredPropertiesException("Token is required")
        payload = verify_jwt_token(token, expected_type=token_type)
        if not payload:
            raise HTTPException(status_code=400, detail="Invalid or expired token")
        user = self.users.get_user_by_id(self.db, payload.get("sub"))
        if not user:
            raise UserNotFoundException()

        # Links die once the address changes, and reset links once the password does
        stale = payload.get("email") != user.email
        if token_type == PASSWORD_RESET_TOKEN_TYPE:
            stale = stale or payload.get("pwd") != password_fingerprint(user.password)
        if stale:
            logger.warning(f"⚠️ Stale {token_type} token presented for user {user.id}")
            raise HTTPException(status_code=400, detail="Invalid or expired token")
        return user

    def confirm_email(self, token: Optional[str]) -> User:
        user = self._user_from_action_token(token, EMAIL_VERIFICATION_TOKEN_TYPE)
        if user.email_verified_at is None:
            user = self.users.update_user(self.db, user, email_verified_at=datetime.utcnow())
            logger.info(f"✅ Email verified for user {user.id}")
        return user

    def reset_password(self, token: Optional[str], new_password: str, confirm_new_password: str) -> User:
        """Set a new password from a reset token and revoke every open session"""
        if not token:
            raise MissingRequiredPropertiesException("Token is required")
        if new_password != confirm_new_password:
            raise HTTPException(status_code=400, detail="Passwords do not match")

        user = self._user_from_action_token(token, PASSWORD_RESET_TOKEN_TYPE)
        user = self.users.update_user(self.db, user, password=hash_password_bcrypt(new_password))
        revoked = self.repo.delete_user_sessions(self.db, user.id)
        logger.info(f"🔑 Password reset for user {user.id}; revoked {revoked} session(s)")
        return user

    # ------------------------------------------------------------------
    # SMS one-time codes
    # ------------------------------------------------------------------

    async def send_otp(self, phone: Optional[str], twilio: TwilioVerifyService) -> dict:
        if not phone:
            raise MissingRequiredPropertiesException()
        to = self._normalize_phone(phone)

        verification = await twilio.create_verification(to)
        return {"status": verification.get("status", "pending"), "message": f"The OTP has been sent to {to}"}

    async def verify_otp(self, phone: Optional[str], otp: Optional[str], twilio: TwilioVerifyService) -> dict:
        if not phone or not otp:
            raise MissingRequiredPropertiesException()
        to = self._normalize_phone(phone)

        check = await twilio.check_verification(to, otp)
        if check.get("status") != "approved":
            logger.info(f"ℹ️ OTP rejected for {to}")
            return {"success": False, "message": "Invalid or expired code"}

        user = self.users.get_user_by_phone(self.db, to)
        if user:
            self.users.update_user(self.db, user, phone_verified_at=datetime.utcnow())
            logger.info(f"✅ Phone verified for user {user.id}")
        return {"success": True, "message": "The code is valid"}

    @staticmethod
    def _normalize_phone(phone: str) -> str:
        try:
            return validate_phone(phone)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
