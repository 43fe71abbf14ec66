import pytest

import create_admin
from schedule_pro.models import Role, User

from .conftest import make_user


@pytest.fixture(autouse=True)
def _bind_to_test_db(monkeypatch, engine, session_factory):
    monkeypatch.setattr(create_admin, "engine", engine)
    monkeypatch.setattr(create_admin, "SessionLocal", session_factory)


def test_creates_admin(db):
    create_admin.create_admin("Ada", "Ada@Example.com", "+1 555 999 0000", "Adm1n!pw")

    user = db.query(User).filter(User.email == "ada@example.com").one()
    assert user.role == Role.ADMIN.value
    assert user.phone == "+15559990000"


def test_promotes_existing_user(db):
    existing = make_user(db, Role.CUSTOMER, email="promote@example.com")

    create_admin.create_admin("Ignored", "promote@example.com", "+1 555 999 0001", "Adm1n!pw")

    db.expire_all()
    assert db.get(User, existing.id).role == Role.ADMIN.value


def test_rejects_weak_password():
    with pytest.raises(ValueError):
        create_admin.create_admin("Ada", "ada@example.com", "+15559990000", "weak")
