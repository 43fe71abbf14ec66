"""Auth repository - Database operations for refresh sessions"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import UserSession


class SessionRepository:
    """Repository for refresh-token sessions"""

    @staticmethod
    def create_session(
        db: Session,
        user_id: str,
        refresh_token: str,
        expires_at: datetime,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> UserSession:
        session = UserSession(
            user_id=user_id,
            refresh_token=refresh_token,
            expires_at=expires_at,
            user_agent=user_agent,
            ip_address=ip_address,
        )
        db.add(session)
        db.commit()
        db.refresh(session)
        return session

    @staticmethod
    def get_session_by_token(db: Session, refresh_token: str) -> Optional[UserSession]:
        return db.query(UserSession).filter(UserSession.refresh_token == refresh_token).first()

    @staticmethod
    def rotate_session(
        db: Session, session: UserSession, refresh_token: str, expires_at: datetime
    ) -> UserSession:
        session.refresh_token = refresh_token
        session.expires_at = expires_at
        db.commit()
        db.refresh(session)
        return session

    @staticmethod
    def delete_session(db: Session, session: UserSession) -> None:
        db.delete(session)
        db.commit()

    @staticmethod
    def delete_user_sessions(db: Session, user_id: str) -> int:
        """Revoke every session of a user. Returns the number removed"""
        count = db.query(UserSession).filter(UserSession.user_id == user_id).delete()
        db.commit()
        return count
