from conftest import PASSWORD, auth_headers

from camrent.models.user import UserRole


def _register(client, **overrides):
    payload = {
        "email": "amina@camrent.cm",
        "password": PASSWORD,
        "confirm_password": PASSWORD,
        "first_name": "Amina",
        "last_name": "Njoya",
        "role": "landlord",
    }
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


def test_register_returns_token_and_user(client):
    response = _register(client)
    assert response.status_code == 201
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "amina@camrent.cm"
    assert body["user"]["role"] == "landlord"
    assert body["user"]["subscription_status"] == "inactive"
    assert body["user"]["is_verified"] is False

    me = client.get("/api/auth/user", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == body["user"]["id"]


def test_register_rejects_duplicate_email_case_insensitively(client):
    assert _register(client).status_code == 201
    response = _register(client, email="AMINA@camrent.cm")
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


def test_register_rejects_mismatched_passwords(client):
    response = _register(client, confirm_password="something-else")
    assert response.status_code == 400


def test_login(client, make_user):
    user = make_user(UserRole.renter, email="paul@camrent.cm")
    response = client.post("/api/auth/login", json={"email": "paul@camrent.cm", "password": PASSWORD})
    assert response.status_code == 200
    assert response.json()["user"]["id"] == user.id


def test_login_wrong_password(client, make_user):
    make_user(UserRole.renter, email="paul@camrent.cm")
    response = client.post("/api/auth/login", json={"email": "paul@camrent.cm", "password": "wrong-password"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_current_user_requires_token(client):
    assert client.get("/api/auth/user").status_code == 401
    bad = client.get("/api/auth/user", headers={"Authorization": "Bearer not-a-jwt"})
    assert bad.status_code == 401


def test_allow_listed_email_is_reported_as_admin(client, make_user):
    user = make_user(UserRole.landlord, email="root@camrent.cm")
    response = client.get("/api/auth/user", headers=auth_headers(user))
    assert response.json()["is_admin"] is True
