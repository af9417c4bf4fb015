"""
Tests for the password recovery flow.
"""
from vetclinic.core.security import verify_password
from vetclinic.veterinarians.models import Veterinarian


def recover(client, mailer, email="a@example.com"):
    response = client.post("/api/recuperar-password", json={"email": email})
    assert response.status_code == 200, response.text
    return mailer.last("recovery").token


def test_recovery_request_stores_token_and_sends_email(client, db, mailer, confirmed):
    confirmed()

    response = client.post("/api/recuperar-password", json={"email": "a@example.com"})

    assert response.json() == {"msg": "Check your email to reset your account"}
    sent = mailer.last("recovery")
    assert sent.email == "a@example.com"
    assert db.query(Veterinarian).one().token == sent.token


def test_recovery_request_overwrites_previous_token(client, db, mailer, confirmed):
    confirmed()
    first = recover(client, mailer)
    second = recover(client, mailer)

    assert first != second
    assert db.query(Veterinarian).one().token == second
    assert client.get(f"/api/recuperar-password/{first}").status_code == 404


def test_recovery_request_unknown_email(client):
    response = client.post("/api/recuperar-password", json={"email": "nobody@example.com"})
    assert response.status_code == 404
    assert response.json() == {"msg": "Sorry, the user is not registered"}


def test_recovery_request_requires_email(client):
    assert client.post("/api/recuperar-password", json={"email": ""}).status_code == 400
    assert client.post("/api/recuperar-password", json={}).status_code == 400


def test_recovery_request_mail_failure_is_500_and_stores_nothing(client, db, mailer, confirmed):
    confirmed()
    mailer.fail = True

    response = client.post("/api/recuperar-password", json={"email": "a@example.com"})

    assert response.status_code == 500
    assert "msg" in response.json()
    assert db.query(Veterinarian).one().token is None


def test_check_token_does_not_consume_it(client, mailer, confirmed):
    confirmed()
    token = recover(client, mailer)

    first = client.get(f"/api/recuperar-password/{token}")
    second = client.get(f"/api/recuperar-password/{token}")

    assert first.status_code == 200
    assert first.json() == {"msg": "Token confirmed, you can now create your new password"}
    assert second.status_code == 200


def test_check_unknown_token(client):
    response = client.get("/api/recuperar-password/never-issued")
    assert response.status_code == 404
    assert response.json() == {"msg": "Sorry, account cannot be validated"}


def test_reset_scenario(client, db, mailer, confirmed):
    confirmed()
    old_hash = db.query(Veterinarian).one().password_hash
    token = recover(client, mailer)

    response = client.post(f"/api/nuevo-password/{token}",
                           json={"password": "p2", "confirmpassword": "p2"})

    assert response.status_code == 200
    assert response.json() == {"msg": "Congratulations, you can now log in with your new password"}
    veterinarian = db.query(Veterinarian).one()
    assert veterinarian.token is None
    assert veterinarian.password_hash != old_hash

    old = client.post("/api/login", json={"email": "a@example.com", "password": "p1"})
    assert old.status_code == 401
    new = client.post("/api/login", json={"email": "a@example.com", "password": "p2"})
    assert new.status_code == 200


def test_reset_with_same_password_still_changes_hash(client, db, mailer, confirmed):
    confirmed()
    old_hash = db.query(Veterinarian).one().password_hash
    token = recover(client, mailer)

    client.post(f"/api/nuevo-password/{token}", json={"password": "p1", "confirmpassword": "p1"})

    assert db.query(Veterinarian).one().password_hash != old_hash


def test_reset_token_is_single_use(client, mailer, confirmed):
    confirmed()
    token = recover(client, mailer)
    body = {"password": "p2", "confirmpassword": "p2"}

    assert client.post(f"/api/nuevo-password/{token}", json=body).status_code == 200
    assert client.post(f"/api/nuevo-password/{token}", json=body).status_code == 404
    assert client.get(f"/api/recuperar-password/{token}").status_code == 404


def test_reset_password_mismatch(client, db, mailer, confirmed):
    confirmed()
    token = recover(client, mailer)

    response = client.post(f"/api/nuevo-password/{token}",
                           json={"password": "p2", "confirmpassword": "p3"})

    assert response.status_code == 400
    assert response.json() == {"msg": "Sorry, passwords don't match"}
    assert db.query(Veterinarian).one().token == token


def test_reset_missing_fields(client, mailer, confirmed):
    confirmed()
    token = recover(client, mailer)
    response = client.post(f"/api/nuevo-password/{token}", json={"password": "p2"})
    assert response.status_code == 400


def test_reset_unknown_token(client):
    response = client.post("/api/nuevo-password/never-issued",
                           json={"password": "p2", "confirmpassword": "p2"})
    assert response.status_code == 404


def test_reset_sends_notification(client, mailer, confirmed):
    confirmed()
    token = recover(client, mailer)
    client.post(f"/api/nuevo-password/{token}", json={"password": "p2", "confirmpassword": "p2"})
    assert mailer.last("password_changed").email == "a@example.com"


def test_reset_succeeds_when_notification_fails(client, mailer, confirmed):
    confirmed()
    token = recover(client, mailer)
    mailer.fail = True

    response = client.post(f"/api/nuevo-password/{token}",
                           json={"password": "p2", "confirmpassword": "p2"})

    assert response.status_code == 200


def test_confirmation_token_cannot_be_used_after_recovery_overwrote_it(client, mailer, register):
    confirmation = register()
    recover(client, mailer)
    assert client.get(f"/api/confirmar/{confirmation}").status_code == 404


def test_confirmation_token_cannot_reset_password(client, db, register):
    token = register()

    check = client.get(f"/api/recuperar-password/{token}")
    response = client.post(f"/api/nuevo-password/{token}",
                           json={"password": "x", "confirmpassword": "x"})

    assert check.status_code == 404
    assert response.status_code == 404
    assert response.json() == {"msg": "Sorry, account cannot be validated"}
    veterinarian = db.query(Veterinarian).one()
    assert veterinarian.token == token
    assert veterinarian.confirmed is False
    assert verify_password("p1", veterinarian.password_hash)


def test_reset_token_cannot_confirm_account(client, db, mailer, register):
    register()
    token = recover(client, mailer)

    response = client.get(f"/api/confirmar/{token}")

    assert response.status_code == 404
    veterinarian = db.query(Veterinarian).one()
    assert veterinarian.confirmed is False
    assert veterinarian.token == token
    assert veterinarian.token_purpose == "password_reset"
