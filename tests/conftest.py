import os
import time
import uuid
from datetime import date, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTH_JWT_SECRET", "test-jwt-secret")

import httpx
import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from barberbook.config import AUTH_JWT_AUDIENCE, AUTH_JWT_SECRET
from barberbook.database import Base, get_db
from barberbook.main import app
from barberbook.models import (
    Barbershop,
    NotificationSettings,
    Professional,
    Profile,
    Service,
)
from barberbook.services import http_client


def make_token(user_id: str, email: str = None) -> str:
    claims = {
        "sub": user_id,
        "aud": AUTH_JWT_AUDIENCE,
        "email": email,
        "exp": int(time.time()) + 3600,
    }
    return jwt.encode(claims, AUTH_JWT_SECRET, algorithm="HS256")


def auth_headers(profile: Profile) -> dict:
    return {"Authorization": f"Bearer {make_token(profile.id, profile.email)}"}


@pytest.fixture
def booking_day() -> date:
    """A day safely in the future"""
    return date.today() + timedelta(days=7)


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def headers_for():
    """Bearer headers for a profile"""
    return auth_headers


@pytest.fixture
def http_calls(monkeypatch):
    """Record outbound integration requests and answer 200 {"ok": true}"""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"ok": True})

    monkeypatch.setattr(http_client, "_transport", httpx.MockTransport(handler))
    return calls


@pytest.fixture
def owner(db):
    profile = Profile(
        id=str(uuid.uuid4()),
        full_name="Carlos Dono",
        email="dono@barbeariacentral.com",
        phone="11912345678",
        role="admin",
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


@pytest.fixture
def barbershop(db, owner):
    shop = Barbershop(
        name="Barbearia Central",
        slug="barbearia-central",
        owner_id=owner.id,
        opening_time="08:00",
        closing_time="19:00",
        opening_days=[],
    )
    db.add(shop)
    db.commit()
    db.refresh(shop)
    return shop


@pytest.fixture
def professional(db, barbershop):
    pro = Professional(barbershop_id=barbershop.id, name="Rafael Navalha", is_active=True)
    db.add(pro)
    db.commit()
    db.refresh(pro)
    return pro


@pytest.fixture
def service(db, barbershop):
    item = Service(
        barbershop_id=barbershop.id,
        name="Corte Masculino",
        price=50.0,
        duration_minutes=30,
        is_active=True,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@pytest.fixture
def client_profile(db):
    profile = Profile(
        id=str(uuid.uuid4()),
        full_name="João Cliente",
        email="joao@example.com",
        phone="11987654321",
        role="client",
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


@pytest.fixture
def notification_settings(db, barbershop):
    settings = NotificationSettings(
        barbershop_id=barbershop.id,
        enabled=True,
        send_to_client=True,
        send_whatsapp=False,
        reminder_minutes=30,
        send_booking_confirmation=True,
        send_booking_reminder=True,
    )
    db.add(settings)
    db.commit()
    db.refresh(settings)
    return settings
