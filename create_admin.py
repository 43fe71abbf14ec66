"""
Bootstrap the first administrator account
Usage: python create_admin.py --name "Ada" --email ada@example.com --phone +15551234567 --password 'S3cret!'
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from schedule_pro import models  # noqa: F401
from schedule_pro.database import Base, SessionLocal, engine
from schedule_pro.domain.users.repository import UserRepository
from schedule_pro.models import Role
from schedule_pro.security import hash_password_bcrypt
from schedule_pro.shared.validators import validate_email, validate_password, validate_phone

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def create_admin(name: str, email: str, phone: str, password: str) -> None:
    """Create an ADMIN user, or promote the existing account with that email"""
    email = validate_email(email)
    phone = validate_phone(phone)
    validate_password(password)

    Base.metadata.create_all(bind=engine, checkfirst=True)
    db = SessionLocal()
    try:
        repo = UserRepository()
        existing = repo.get_user_by_email(db, email)
        if existing:
            repo.update_user(db, existing, role=Role.ADMIN.value)
            logger.info(f"✅ Promoted existing user {existing.id} to ADMIN")
            return

        if repo.get_user_by_phone(db, phone):
            raise ValueError(f"Phone {phone} already belongs to another account")

        user = repo.create_user(
            db,
            name=name,
            email=email,
            phone=phone,
            password=hash_password_bcrypt(password),
            role=Role.ADMIN.value,
        )
        logger.info(f"✅ Admin created: {user.id} ({user.email})")
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a Schedule Pro administrator")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--phone", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    try:
        create_admin(args.name, args.email, args.phone, args.password)
    except Exception as e:
        logger.error(f"❌ Failed to create admin: {e}")
        sys.exit(1)
