"""User service - Business logic for user accounts"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Query, Session

from ...exceptions import (
    InvalidCredentialsException,
    UserAlreadyRegisteredException,
    UserNotFoundException,
)
from ...models import Role, User
from ...security import hash_password_bcrypt, verify_password_bcrypt
from .repository import UserRepository
from .schemas import PasswordChange, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

PHONE_ALREADY_REGISTERED = "Phone already registered! Try logging in."


class UserService:
    """Service layer for user business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def list_users(self, role: Optional[Role] = None) -> Query:
        return self.repo.users_query(self.db, role)

    def get_user(self, user_id: str) -> User:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise UserNotFoundException()
        return user

    def get_user_with_role(self, user_id: str, role: Role, detail: str) -> User:
        """Load a user and reject it with 400 `detail` unless it holds `role`"""
        user = self.get_user(user_id)
        if user.role != role.value:
            logger.warning(f"⚠️ User {user_id} has role {user.role}, expected {role.value}")
            raise HTTPException(status_code=400, detail=detail)
        return user

    def get_staff_member(self, user_id: str) -> User:
        return self.get_user_with_role(user_id, Role.STAFF, "User is not a staff member")

    def get_customer_member(self, user_id: str) -> User:
        return self.get_user_with_role(user_id, Role.CUSTOMER, "User is not a customer")

    def get_user_by_email(self, email: str) -> User:
        user = self.repo.get_user_by_email(self.db, email)
        if not user:
            raise UserNotFoundException()
        return user

    def create_user(self, data: UserCreate, caller: Optional[User] = None) -> User:
        """Register a user; only admins may create STAFF or ADMIN accounts"""
        logger.info(f"📥 Creating {data.role.value} user: {data.email}")

        if data.role != Role.CUSTOMER and (caller is None or caller.role != Role.ADMIN.value):
            logger.warning(f"⚠️ Refused to create {data.role.value} account without admin caller")
            raise HTTPException(status_code=403, detail="Only administrators can create staff or admin accounts")

        if self.repo.get_user_by_email(self.db, data.email):
            raise UserAlreadyRegisteredException()
        if self.repo.get_user_by_phone(self.db, data.phone):
            raise HTTPException(status_code=409, detail=PHONE_ALREADY_REGISTERED)

        user = self.repo.create_user(
            self.db,
            name=data.name,
            email=data.email,
            password=hash_password_bcrypt(data.password),
            phone=data.phone,
            photo=data.photo,
            role=data.role.value,
        )
        logger.info(f"✅ User created: {user.id}")
        return user

    def ensure_can_manage(self, user_id: str, caller: User) -> None:
        """Users may manage their own account; admins may manage any"""
        if caller.role != Role.ADMIN.value and caller.id != user_id:
            logger.warning(f"⚠️ User {caller.id} attempted to modify user {user_id}")
            raise HTTPException(status_code=403, detail="You can only modify your own account")

    def update_user(self, user_id: str, data: UserUpdate) -> User:
        """Apply profile updates, keeping email and phone unique"""
        user = self.get_user(user_id)

        if data.email and data.email != user.email:
            existing = self.repo.get_user_by_email(self.db, data.email)
            if existing and existing.id != user.id:
                raise HTTPException(status_code=409, detail="Email already registered")
        if data.phone and data.phone != user.phone:
            existing = self.repo.get_user_by_phone(self.db, data.phone)
            if existing and existing.id != user.id:
                raise HTTPException(status_code=409, detail=PHONE_ALREADY_REGISTERED)

        updates = {}
        if data.name is not None:
            updates["name"] = data.name.strip()
        if data.email is not None and data.email != user.email:
            updates["email"] = data.email
            # A new address has not been verified yet
            user.email_verified_at = None
        if data.phone is not None and data.phone != user.phone:
            updates["phone"] = data.phone
            user.phone_verified_at = None
        if data.photo is not None:
            updates["photo"] = data.photo

        return self.repo.update_user(self.db, user, **updates)

    def change_password(self, user_id: str, data: PasswordChange) -> User:
        user = self.get_user(user_id)

        if not verify_password_bcrypt(data.currentPassword, user.password):
            logger.warning(f"⚠️ Wrong current password for user {user_id}")
            raise InvalidCredentialsException()
        if data.newPassword != data.confirmNewPassword:
            raise HTTPException(status_code=400, detail="Passwords do not match")

        logger.info(f"🔑 Changing password for user {user_id}")
        return self.repo.update_user(self.db, user, password=hash_password_bcrypt(data.newPassword))

    def set_password(self, user: User, new_password: str) -> User:
        return self.repo.update_user(self.db, user, password=hash_password_bcrypt(new_password))

    def delete_user(self, user_id: str) -> None:
        user = self.get_user(user_id)
        logger.info(f"🗑️ Deleting user {user_id}")
        self.repo.delete_user(self.db, user)
