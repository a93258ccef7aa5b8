import json
import uuid
from datetime import datetime, timedelta

import httpx
import pytest

from barberbook.models import Barbershop, NotificationSettings, RegistrationCode, UserRole
from barberbook.services import auth_admin, http_client

NEW_USER_ID = str(uuid.uuid4())


@pytest.fixture
def auth_service(monkeypatch):
    """Fake auth admin API creating a user with a fixed id"""
    created = []

    def handler(request: httpx.Request) -> httpx.Response:
        created.append(json.loads(request.content))
        return httpx.Response(200, json={"id": NEW_USER_ID, "email": created[-1]["email"]})

    monkeypatch.setattr(auth_admin, "AUTH_SERVICE_ROLE_KEY", "service-role-key")
    monkeypatch.setattr(http_client, "_transport", httpx.MockTransport(handler))
    return created


@pytest.fixture
def registration_code(db):
    code = RegistrationCode(code="BEMVINDO1")
    db.add(code)
    db.commit()
    db.refresh(code)
    return code


def register_payload(code="BEMVINDO1", name="Barbearia do João"):
    return {
        "code": code,
        "owner": {
            "email": "Joao@Example.com",
            "password": "segredo123",
            "full_name": "João Barbeiro",
            "phone": "(11) 98888-7777",
        },
        "barbershop": {"name": name, "address": "Rua das Tesouras, 10"},
    }


def test_register_creates_shop_owner_and_settings(client, db, auth_service, registration_code):
    response = client.post("/barbershops/register", json=register_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["user_id"] == NEW_USER_ID
    assert body["slug"] == "barbearia-do-joao"
    assert auth_service[0]["email"] == "joao@example.com"
    assert auth_service[0]["email_confirm"] is True

    barbershop = db.query(Barbershop).filter(Barbershop.id == body["barbershop_id"]).one()
    assert barbershop.owner_id == NEW_USER_ID
    assert barbershop.whatsapp == "11988887777"

    role = db.query(UserRole).filter(UserRole.user_id == NEW_USER_ID).one()
    assert role.role == "admin"
    assert role.barbershop_id == barbershop.id

    settings = db.query(NotificationSettings).filter(NotificationSettings.barbershop_id == barbershop.id).one()
    assert settings.admin_email == "joao@example.com"

    db.refresh(registration_code)
    assert registration_code.is_used is True
    assert registration_code.used_by == NEW_USER_ID


def test_slug_collision_gets_suffix(client, barbershop, auth_service, registration_code):
    response = client.post("/barbershops/register", json=register_payload(name="Barbearia Central"))
    assert response.status_code == 201
    assert response.json()["slug"] == "barbearia-central-2"


def test_used_code_is_rejected(client, db, auth_service, registration_code):
    registration_code.is_used = True
    db.commit()

    response = client.post("/barbershops/register", json=register_payload())
    assert response.status_code == 409
    assert auth_service == []


def test_expired_code_is_rejected(client, db, auth_service, registration_code):
    registration_code.expires_at = datetime.utcnow() - timedelta(days=1)
    db.commit()

    response = client.post("/barbershops/register", json=register_payload())
    assert response.status_code == 400


def test_unknown_code_is_rejected(client, auth_service):
    response = client.post("/barbershops/register", json=register_payload(code="NAOEXISTE"))
    assert response.status_code == 400
    assert auth_service == []


def test_auth_service_rejection_is_reported(client, registration_code, monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"msg": "A user with this email address has already been registered"})

    monkeypatch.setattr(auth_admin, "AUTH_SERVICE_ROLE_KEY", "service-role-key")
    monkeypatch.setattr(http_client, "_transport", httpx.MockTransport(handler))

    response = client.post("/barbershops/register", json=register_payload())
    assert response.status_code == 400
    assert "already been registered" in response.json()["detail"]
