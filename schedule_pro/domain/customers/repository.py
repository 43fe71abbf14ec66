"""Customer repository - Database operations for users holding the CUSTOMER role"""

from typing import Optional

from sqlalchemy.orm import Query, Session

from ...models import Appointment, Role, User


class CustomerRepository:
    """Repository for customer database operations"""

    @staticmethod
    def customers_query(db: Session) -> Query:
        return (
            db.query(User)
            .filter(User.role == Role.CUSTOMER.value)
            .order_by(User.created_at.desc(), User.id)
        )

    @staticmethod
    def get_customer_by_id(db: Session, customer_id: str) -> Optional[User]:
        return (
            db.query(User)
            .filter(User.id == customer_id, User.role == Role.CUSTOMER.value)
            .first()
        )

    @staticmethod
    def get_customer_by_email(db: Session, email: str) -> Optional[User]:
        return (
            db.query(User)
            .filter(User.email == email.strip().lower(), User.role == Role.CUSTOMER.value)
            .first()
        )

    @staticmethod
    def delete_customer(db: Session, customer: User) -> int:
        """Delete a customer together with their appointments. Returns appointments removed"""
        removed = (
            db.query(Appointment)
            .filter(Appointment.customer_id == customer.id)
            .delete(synchronize_session="fetch")
        )
        db.delete(customer)
        db.commit()
        return removed
