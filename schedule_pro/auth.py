import logging
import time
from typing import Callable, Optional

from fastapi import Depends, HTTPException, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .config import TOKEN_RENEWAL_THRESHOLD_MINUTES
from .database import get_db
from .models import Role, User
from .security import ACCESS_TOKEN_TYPE, create_access_token, verify_jwt_token

logger = logging.getLogger(__name__)

# auto_error=False so a missing header produces our own 401 message
security = HTTPBearer(auto_error=False)


def _authenticate(token: str, db: Session, response: Optional[Response]) -> User:
    """Decode an access token, load its user and renew the token when close to expiry"""
    payload = verify_jwt_token(token, expected_type=ACCESS_TOKEN_TYPE)
    if not payload:
        logger.warning("⚠️ Rejected invalid or expired access token")
        raise HTTPException(status_code=403, detail="Access denied")

    user_id = payload.get("sub")
    user = db.query(User).filter(User.id == user_id).first() if user_id else None
    if not user:
        logger.warning(f"⚠️ Token subject {user_id} no longer exists")
        raise HTTPException(status_code=401, detail="User not found")

    # Sliding renewal: hand out a fresh token in the response header
    remaining = payload.get("exp", 0) - time.time()
    if response is not None and remaining < TOKEN_RENEWAL_THRESHOLD_MINUTES * 60:
        new_token, _ = create_access_token(user)
        response.headers["Authorization"] = f"Bearer {new_token}"
        logger.info(f"🔄 Renewed access token for user {user.id} ({int(remaining)}s left)")

    return user


async def get_current_user(
    response: Response,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current user from the Bearer access token"""
    if not credentials or not credentials.credentials:
        logger.warning("⚠️ No credentials provided")
        raise HTTPException(status_code=401, detail="Token not provided")

    user = _authenticate(credentials.credentials, db, response)
    logger.debug(f"✅ User authenticated: {user.email}")
    return user


async def get_optional_user(
    response: Response,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """
    Like get_current_user, but anonymous requests yield None instead of 401.

    A stale or unreadable token is treated as anonymous so public endpoints
    keep working for clients that still send an old header.
    """
    if not credentials or not credentials.credentials:
        return None
    if not verify_jwt_token(credentials.credentials, expected_type=ACCESS_TOKEN_TYPE):
        logger.info("ℹ️ Ignoring invalid bearer token on public endpoint")
        return None
    return _authenticate(credentials.credentials, db, response)


def require_roles(*roles: Role) -> Callable:
    """Build a dependency that only admits users holding one of roles"""
    allowed = {role.value for role in roles}

    async def role_guard(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            logger.warning(
                f"⚠️ User {user.id} with role {user.role} denied; requires one of {sorted(allowed)}"
            )
            raise HTTPException(status_code=403, detail="You do not have permission to access this resource")
        return user

    return role_guard
