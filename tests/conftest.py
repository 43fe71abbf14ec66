import os
from datetime import date
from typing import Generator

# Settings are read at import time, so these must be set before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ.pop("RESEND_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from schedule_pro import email_service
from schedule_pro.database import Base, get_db
from schedule_pro.main import app
from schedule_pro.models import Role, ServiceItem, StaffAvailability, StaffService, User
from schedule_pro.security import create_access_token, hash_password_bcrypt
from schedule_pro.services.twilio_service import get_twilio_verify_service

DEFAULT_PASSWORD = "Passw0rd!"

# 2030-01-07 is a Monday (day_of_week == 1)
MONDAY = date(2030, 1, 7)
MONDAY_INDEX = 1


@pytest.fixture
def engine():
    """Fresh in-memory database per test, shared across threads via StaticPool"""
    test_engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )

    @event.listens_for(test_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


class FakeTwilioVerify:
    """Stand-in for TwilioVerifyService that approves one known code"""

    def __init__(self):
        self.sent = []
        self.valid_code = "123456"

    async def create_verification(self, to: str, channel: str = "sms") -> dict:
        self.sent.append(to)
        return {"status": "pending", "to": to, "channel": channel}

    async def check_verification(self, to: str, code: str) -> dict:
        if to in self.sent and code == self.valid_code:
            return {"status": "approved", "valid": True}
        return {"status": "pending", "valid": False}


@pytest.fixture
def fake_twilio() -> FakeTwilioVerify:
    return FakeTwilioVerify()


@pytest.fixture
def sent_emails(monkeypatch) -> list:
    """Record outgoing emails instead of calling Resend"""
    outbox = []

    async def fake_reset(to, reset_link, expires_minutes):
        outbox.append({"kind": "password_reset", "to": to, "link": reset_link})
        return {"id": "test"}

    async def fake_verification(to, user_name, verify_link):
        outbox.append({"kind": "email_verification", "to": to, "link": verify_link})
        return {"id": "test"}

    async def fake_confirmation(to, **kwargs):
        outbox.append({"kind": "appointment_confirmation", "to": to, **kwargs})
        return {"id": "test"}

    monkeypatch.setattr(email_service, "send_password_reset_email", fake_reset)
    monkeypatch.setattr(email_service, "send_email_verification", fake_verification)
    monkeypatch.setattr(email_service, "send_appointment_confirmation", fake_confirmation)
    return outbox


@pytest.fixture
def client(session_factory, fake_twilio, sent_emails) -> Generator[TestClient, None, None]:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_twilio_verify_service] = lambda: fake_twilio
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Data helpers
# ---------------------------------------------------------------------------

_counter = {"n": 0}


def make_user(db: Session, role: Role = Role.CUSTOMER, name: str = None, email: str = None, phone: str = None, password: str = DEFAULT_PASSWORD) -> User:
    _counter["n"] += 1
    n = _counter["n"]
    user = User(
        name=name or f"{role.value.title()} {n}",
        email=email or f"{role.value.lower()}{n}@example.com",
        phone=phone or f"+1555000{n:04d}",
        password=hash_password_bcrypt(password),
        role=role.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    token, _ = create_access_token(user)
    return {"Authorization": f"Bearer {token}"}


def make_service_item(db: Session, type: str = "Haircut", price: float = 30.0, duration: int = 60) -> ServiceItem:
    item = ServiceItem(type=type, price=price, duration=duration)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def link_staff(db: Session, staff: User, item: ServiceItem, custom_price: float = None, active: bool = True) -> StaffService:
    link = StaffService(staff_id=staff.id, service_id=item.id, custom_price=custom_price, active=active)
    db.add(link)
    db.commit()
    db.refresh(link)
    return link


def add_window(db: Session, staff: User, day_of_week: int = MONDAY_INDEX, start: str = "09:00", end: str = "17:00") -> StaffAvailability:
    window = StaffAvailability(staff_id=staff.id, day_of_week=day_of_week, start_time=start, end_time=end)
    db.add(window)
    db.commit()
    db.refresh(window)
    return window


@pytest.fixture
def admin(db) -> User:
    return make_user(db, Role.ADMIN)


@pytest.fixture
def staff(db) -> User:
    return make_user(db, Role.STAFF)


@pytest.fixture
def customer(db) -> User:
    return make_user(db, Role.CUSTOMER)


@pytest.fixture
def service_item(db) -> ServiceItem:
    return make_service_item(db)
