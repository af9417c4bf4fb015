"""
Tests for registration, email confirmation and confirmation resend.
"""
import pytest

from vetclinic.core.security import verify_password
from vetclinic.veterinarians.models import Veterinarian


def test_register_creates_unconfirmed_account(client, db, mailer, registration):
    response = client.post("/api/registro", json=registration)

    assert response.status_code == 200
    assert response.json() == {"msg": "Check your email to confirm your account"}

    veterinarian = db.query(Veterinarian).one()
    assert veterinarian.email == "a@example.com"
    assert veterinarian.name == "Ana"
    assert veterinarian.confirmed is False
    assert veterinarian.is_active is True
    assert veterinarian.password_hash != "p1"
    assert verify_password("p1", veterinarian.password_hash)

    sent = mailer.last("confirmation")
    assert sent.email == "a@example.com"
    assert sent.token == veterinarian.token


def test_register_does_not_reveal_token(client, mailer, registration):
    response = client.post("/api/registro", json=registration)
    assert mailer.last("confirmation").token not in response.text


def test_register_normalizes_email(client, db, registration):
    client.post("/api/registro", json={**registration, "email": "Ana.Bravo@Example.COM"})
    assert db.query(Veterinarian).one().email == "ana.bravo@example.com"


@pytest.mark.parametrize("field", ["email", "password", "nombre", "apellido", "direccion", "telefono"])
def test_register_rejects_missing_field(client, db, field, registration):
    body = {key: value for key, value in registration.items() if key != field}
    response = client.post("/api/registro", json=body)

    assert response.status_code == 400
    assert response.json()["msg"] == "Sorry, you must fill in all fields"
    assert db.query(Veterinarian).count() == 0


@pytest.mark.parametrize("field", ["password", "nombre", "telefono"])
def test_register_rejects_empty_field(client, db, field, registration):
    response = client.post("/api/registro", json={**registration, field: ""})
    assert response.status_code == 400
    assert db.query(Veterinarian).count() == 0


def test_register_rejects_blank_profile_field(client, registration):
    response = client.post("/api/registro", json={**registration, "apellido": "   "})
    assert response.status_code == 400


def test_register_duplicate_email_conflicts_without_write(client, db, mailer, register, registration):
    register()
    mailer.sent.clear()

    response = client.post("/api/registro", json={**registration, "email": "A@example.com", "nombre": "Other"})

    assert response.status_code == 409
    assert response.json() == {"msg": "Sorry, the email is already registered"}
    assert db.query(Veterinarian).count() == 1
    assert db.query(Veterinarian).one().name == "Ana"
    assert mailer.sent == []


def test_register_persists_account_when_email_fails(client, db, mailer, registration):
    mailer.fail = True

    response = client.post("/api/registro", json=registration)

    assert response.status_code == 200
    assert "could not be sent" in response.json()["msg"]
    veterinarian = db.query(Veterinarian).one()
    assert veterinarian.confirmed is False
    assert veterinarian.token


def test_confirm_sets_flag_and_clears_token(client, db, register):
    token = register()

    response = client.get(f"/api/confirmar/{token}")

    assert response.status_code == 200
    assert response.json() == {"msg": "Token confirmed, you can now log in"}
    veterinarian = db.query(Veterinarian).one()
    assert veterinarian.confirmed is True
    assert veterinarian.token is None
    assert veterinarian.token_purpose is None


def test_confirm_twice_fails_second_time(client, register):
    token = register()
    assert client.get(f"/api/confirmar/{token}").status_code == 200

    response = client.get(f"/api/confirmar/{token}")

    assert response.status_code == 404
    assert response.json() == {"msg": "The account has already been confirmed"}


def test_confirm_unknown_token(client, register):
    register()
    assert client.get("/api/confirmar/never-issued").status_code == 404


def test_confirm_blank_token(client):
    assert client.get("/api/confirmar/%20").status_code == 400


def test_resend_confirmation_replaces_token(client, db, mailer, register):
    first = register()

    response = client.post("/api/reenviar-confirmacion", json={"email": "a@example.com"})

    assert response.status_code == 200
    second = mailer.last("confirmation").token
    assert second != first
    assert client.get(f"/api/confirmar/{first}").status_code == 404
    assert client.get(f"/api/confirmar/{second}").status_code == 200


def test_resend_confirmation_unknown_email(client):
    response = client.post("/api/reenviar-confirmacion", json={"email": "nobody@example.com"})
    assert response.status_code == 404
    assert response.json() == {"msg": "Sorry, the user is not registered"}


def test_resend_confirmation_for_confirmed_account(client, confirmed):
    confirmed()
    response = client.post("/api/reenviar-confirmacion", json={"email": "a@example.com"})
    assert response.status_code == 409


def test_resend_confirmation_mail_failure_keeps_old_token(client, db, mailer, register):
    token = register()
    mailer.fail = True

    response = client.post("/api/reenviar-confirmacion", json={"email": "a@example.com"})

    assert response.status_code == 500
    assert db.query(Veterinarian).one().token == token


@pytest.mark.parametrize("password", ["x" * 73, "ñ" * 37])
def test_register_rejects_password_longer_than_72_bytes(client, db, registration, password):
    response = client.post("/api/registro", json={**registration, "password": password})

    assert response.status_code == 400
    assert db.query(Veterinarian).count() == 0


def test_register_accepts_password_of_72_bytes(client, db, confirmed):
    confirmed(password="x" * 72)

    response = client.post("/api/login", json={"email": "a@example.com", "password": "x" * 72})

    assert response.status_code == 200
    assert verify_password("x" * 72, db.query(Veterinarian).one().password_hash)
