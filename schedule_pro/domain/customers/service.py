"""Customer service - Business logic for customer accounts"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Query, Session

from ...models import Role, User
from ...security import create_access_token, verify_password_bcrypt
from ..auth.service import AuthService
from ..users.schemas import PasswordChange, UserCreate, UserUpdate
from ..users.service import UserService
from .repository import CustomerRepository
from .schemas import CustomerCreate

logger = logging.getLogger(__name__)


class CustomerService:
    """Service layer for customer business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CustomerRepository()
        self.users = UserService(db)

    def list_customers(self) -> Query:
        return self.repo.customers_query(self.db)

    def get_customer(self, customer_id: str) -> User:
        customer = self.repo.get_customer_by_id(self.db, customer_id)
        if not customer:
            raise HTTPException(status_code=404, detail="Customer not found")
        return customer

    def get_customer_by_email(self, email: str) -> User:
        customer = self.repo.get_customer_by_email(self.db, email)
        if not customer:
            raise HTTPException(status_code=404, detail="Customer not found")
        return customer

    def create_customer(self, data: CustomerCreate) -> User:
        logger.info(f"📥 Registering customer: {data.email}")
        return self.users.create_user(UserCreate(**data.model_dump(), role=Role.CUSTOMER))

    def login(self, email: str, password: str) -> tuple[str, int]:
        """Password login for customers. Returns (access_token, expires_in)"""
        customer = self.repo.get_customer_by_email(self.db, email)
        if not customer:
            raise HTTPException(status_code=404, detail="Customer not found")
        if not verify_password_bcrypt(password, customer.password):
            logger.warning(f"⚠️ Failed customer login for {email}")
            raise HTTPException(status_code=401, detail="Invalid credentials")
        return create_access_token(customer)

    async def forgot_password(self, email: Optional[str]) -> None:
        await AuthService(self.db).forgot_password(email)

    def reset_password(self, token: Optional[str], new_password: str, confirm_new_password: str) -> None:
        AuthService(self.db).reset_password(token, new_password, confirm_new_password)

    def update_customer(self, customer_id: str, data: UserUpdate) -> User:
        self.get_customer(customer_id)
        return self.users.update_user(customer_id, data)

    def change_password(self, customer_id: str, data: PasswordChange) -> User:
        self.get_customer(customer_id)
        return self.users.change_password(customer_id, data)

    def delete_customer(self, customer_id: str) -> None:
        customer = self.get_customer(customer_id)
        removed = self.repo.delete_customer(self.db, customer)
        logger.info(f"🗑️ Deleted customer {customer_id} and {removed} appointment(s)")
