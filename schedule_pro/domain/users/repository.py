"""User repository - Database operations for users"""

from typing import Optional

from sqlalchemy.orm import Query, Session

from ...models import Role, User


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def users_query(db: Session, role: Optional[Role] = None) -> Query:
        """Query over users, optionally restricted to one role, newest first"""
        query = db.query(User)
        if role is not None:
            query = query.filter(User.role == role.value)
        return query.order_by(User.created_at.desc(), User.id)

    @staticmethod
    def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.strip().lower()).first()

    @staticmethod
    def get_user_by_phone(db: Session, phone: str) -> Optional[User]:
        return db.query(User).filter(User.phone == phone).first()

    @staticmethod
    def create_user(db: Session, **user_data) -> User:
        """Create a new user"""
        user = User(**user_data)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        """Update a user with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(user, key):
                setattr(user, key, value)

        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def delete_user(db: Session, user: User) -> None:
        db.delete(user)
        db.commit()
