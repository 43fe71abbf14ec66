"""
Security Utilities
Password hashing, password policy checks and JWT issuing/verification
"""

import hashlib
import logging
import re
import secrets
from datetime import datetime, timedelta
from typing import Any, Optional

from jose import JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext

from .config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, SECRET_KEY

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Token "type" claims
ACCESS_TOKEN_TYPE = "access"
PASSWORD_RESET_TOKEN_TYPE = "password_reset"
EMAIL_VERIFICATION_TOKEN_TYPE = "email_verification"


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password_bcrypt(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password_bcrypt(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


def check_password_strength(password: str) -> list[str]:
    """
    Check a password against the account password policy

    Returns:
        List of unmet requirements; empty when the password is acceptable
    """
    feedback = []

    if len(password) < 6:
        feedback.append("Password must be at least 6 characters long")
    if not re.search(r"[A-Z]", password):
        feedback.append("Password must contain an uppercase letter")
    if not re.search(r"[a-z]", password):
        feedback.append("Password must contain a lowercase letter")
    if not re.search(r"\d", password):
        feedback.append("Password must contain a number")
    if not re.search(r"[^A-Za-z0-9]", password):
        feedback.append("Password must contain a special character")

    return feedback


# ============================================================================
# TOKEN GENERATION & VALIDATION
# ============================================================================


def generate_secure_token(length: int = 32) -> str:
    """Generate a cryptographically secure random token"""
    return secrets.token_urlsafe(length)


def create_jwt_token(data: dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT token

    Args:
        data: Data to encode in the token
        expires_delta: Token expiration time (default 15 minutes)
    """
    to_encode = data.copy()
    now = datetime.utcnow()
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=15)

    to_encode.update({"exp": expire, "iat": now})
    return jose_jwt.encode(to_encode, SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_jwt_token(token: str, expected_type: Optional[str] = None) -> Optional[dict[str, Any]]:
    """
    Verify and decode a JWT token

    Returns:
        Decoded payload if valid, None if invalid, expired or of another type
    """
    try:
        payload = jose_jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None

    if expected_type and payload.get("type") != expected_type:
        logger.warning(f"JWT type mismatch: expected {expected_type}, got {payload.get('type')}")
        return None
    return payload


def create_access_token(user) -> tuple[str, int]:
    """Issue an access token for a user. Returns (token, expires_in_seconds)"""
    expires_in = ACCESS_TOKEN_EXPIRE_MINUTES * 60
    token = create_jwt_token(
        {
            "sub": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role,
            "type": ACCESS_TOKEN_TYPE,
        },
        timedelta(seconds=expires_in),
    )
    return token, expires_in


def password_fingerprint(hashed_password: str) -> str:
    """Short digest of the stored hash; changes whenever the password does"""
    return hashlib.sha256(hashed_password.encode("utf-8")).hexdigest()[:16]


def create_action_token(user, token_type: str, expires_minutes: int) -> str:
    """
    Issue a short-lived token for emailed links (password reset, email verification)

    Tokens carry the address they were sent to. Reset tokens also carry a
    fingerprint of the current password hash, so one reset spends the token.
    """
    claims = {"sub": user.id, "email": user.email, "type": token_type}
    if token_type == PASSWORD_RESET_TOKEN_TYPE:
        claims["pwd"] = password_fingerprint(user.password)
    return create_jwt_token(claims, timedelta(minutes=expires_minutes))
