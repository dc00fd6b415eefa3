from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_MODE"] = "demo"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from taskee.database import Base, get_db
from taskee.models.user import Organization, User, ROLE_MANAGER, ROLE_STAFF
from taskee.services.auth import hash_password
from taskee.services.rate_limit import FixedWindowRateLimiter


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock(1000.0)


@pytest.fixture()
def client(engine, clock):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        app.state.import_rate_limiter = FixedWindowRateLimiter(limit=5, window_seconds=60, clock=clock)
        yield c
    app.dependency_overrides.clear()


def make_org(db, code="north", name="Zorg Noord"):
    org = Organization(name=name, org_code=code)
    db.add(org)
    db.commit()
    return org


def make_user(db, org, email, role=ROLE_STAFF, name=None, password="secret123", is_active=True):
    user = User(
        org_id=org.org_id,
        email=email,
        name=name or email.split("@")[0].title(),
        role=role,
        password_hash=hash_password(password),
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    return user


def headers_for(user) -> dict[str, str]:
    return {
        "X-User-Id": str(user.user_id),
        "X-Org-Id": str(user.org_id),
        "X-User-Role": user.role,
    }


@pytest.fixture()
def org(db):
    return make_org(db)


@pytest.fixture()
def other_org(db):
    return make_org(db, code="south", name="Zorg Zuid")


@pytest.fixture()
def manager(db, org):
    return make_user(db, org, "manager@north.test", role=ROLE_MANAGER, name="Mira")


@pytest.fixture()
def anna(db, org):
    return make_user(db, org, "anna@north.test", name="Anna")


@pytest.fixture()
def bram(db, org):
    return make_user(db, org, "bram@north.test", name="Bram")


@pytest.fixture()
def outsider_manager(db, other_org):
    return make_user(db, other_org, "manager@south.test", role=ROLE_MANAGER)
